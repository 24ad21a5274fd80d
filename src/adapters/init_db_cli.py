"""CLI adapter creating the expense schema and default categories."""

from src.infrastructure.container import build_expense_store
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create tables when missing and list the available categories."""
    logger = get_app_logger()
    store = build_expense_store()
    categories = store.list_categories()
    logger.info(f"Schema initialized with {len(categories)} categories")
    for category in categories:
        flag = "" if category.visible else " (hidden)"
        print(f"{category.id:>3}  {category.name}{flag}")


if __name__ == "__main__":  # pragma: no cover
    main()
