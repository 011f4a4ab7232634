"""
Settings for PrepScore, loaded from environment variables / .env file.

    PREPSCORE_DATABASE_URL   SQLAlchemy URL of the attempts database
    PREPSCORE_LOG_LEVEL      logging level name (default INFO)
    PREPSCORE_ECHO_SQL       1/true/yes to echo SQL statements
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(override=False)

DEFAULT_DATABASE_URL = "sqlite:///prepscore.db"


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str
    echo_sql: bool


def get_settings() -> Settings:
    """Build Settings from the current environment."""
    log_level = os.getenv("PREPSCORE_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    return Settings(
        database_url=os.getenv("PREPSCORE_DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL,
        log_level=log_level,
        echo_sql=os.getenv("PREPSCORE_ECHO_SQL", "false").strip().lower() in ("1", "true", "yes"),
    )


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
