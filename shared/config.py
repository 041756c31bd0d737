# shared/config.py
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Settings(BaseModel):
    database_url: Optional[str] = None
    db_echo: bool = False
    search_min_length: int = 2
    default_page_size: int = 10
    max_page_size: int = 100
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


def get_settings() -> Settings:
    """Read settings from the environment (and .env, loaded at import)."""
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        database_url=os.getenv("DATABASE_URL") or None,
        db_echo=os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes"),
        search_min_length=_int_env("SEARCH_MIN_LENGTH", 2),
        default_page_size=_int_env("DEFAULT_PAGE_SIZE", 10),
        max_page_size=_int_env("MAX_PAGE_SIZE", 100),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )
