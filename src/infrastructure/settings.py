"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.domain.constants import DEFAULT_USER_ID, RECENT_SAMPLE_SIZE
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


@dataclass(frozen=True)
class TrackerSettings:
    """Settings for the expense tracker.

    Attributes:
        database_url: SQLAlchemy URL of the expenses database.
        user_id: Owner identity written with new expenses.
        fingerprint_sample: Recent expenses sampled for change detection.
    """

    database_url: str
    user_id: int = DEFAULT_USER_ID
    fingerprint_sample: int = RECENT_SAMPLE_SIZE

    @classmethod
    def from_env(cls) -> "TrackerSettings":
        """Build settings from environment variables (and ``.env``).

        Returns:
            TrackerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        database_url = os.getenv("KAKEIBO_DB_URL", "").strip()
        if not database_url:
            database_url = cls._default_database_url()
        user_id = cls._read_int("KAKEIBO_USER_ID", DEFAULT_USER_ID, logger)
        sample = cls._read_int(
            "KAKEIBO_FINGERPRINT_SAMPLE",
            RECENT_SAMPLE_SIZE,
            logger,
        )
        return cls(
            database_url=database_url,
            user_id=user_id,
            fingerprint_sample=sample,
        )

    @staticmethod
    def _default_database_url() -> str:
        """Return a SQLite URL under ``data/``, creating the directory."""
        data_dir = get_project_root() / "data"
        data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{data_dir / 'kakeibo.db'}"

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        """Read a positive integer variable, falling back on bad input."""
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Ignoring non-integer {name}={raw!r}")
            return default
        if value < 1:
            logger.warning(f"Ignoring non-positive {name}={raw!r}")
            return default
        return value


__all__ = ["TrackerSettings"]
