# shelf/config.py
import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_DATABASE_URL = "sqlite:///readthat.db"
DEFAULT_HARDCOVER_API_URL = "https://api.hardcover.app/v1/graphql"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173"


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    """Runtime configuration read from the environment.

    Every field has a default so the API and CLI start against a local SQLite
    file without any configuration. The Hardcover token is the only value that
    has no usable default: without it metadata lookups fail and the library
    views fall back to placeholder books.
    """
    database_url: str = DEFAULT_DATABASE_URL
    hardcover_api_url: str = DEFAULT_HARDCOVER_API_URL
    hardcover_api_token: str = ""
    hardcover_timeout: float = 8.0
    feed_page_size: int = 20
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: _split_origins(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            hardcover_api_url=os.getenv("HARDCOVER_API_URL", DEFAULT_HARDCOVER_API_URL),
            hardcover_api_token=os.getenv("HARDCOVER_API_TOKEN", ""),
            hardcover_timeout=float(os.getenv("HARDCOVER_TIMEOUT", "8")),
            feed_page_size=int(os.getenv("FEED_PAGE_SIZE", "20")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
        )


settings = Settings.from_env()
