"""
Application configuration. Loads from environment variables.
Secrets and sensitive config must never be hardcoded.
"""

import os

from dotenv import load_dotenv

load_dotenv()
from functools import lru_cache
from typing import Optional


@lru_cache(maxsize=1)
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    app_name: str = "NoteSpace"
    debug: bool = False

    # Database (postgresql+psycopg for psycopg3; sqlite URLs are accepted for local runs)
    database_url: str = "postgresql+psycopg://localhost:5432/notespace_dev"
    db_connect_timeout: int = 10  # seconds

    # Identity provider: HS256 secret shared with the issuer of bearer tokens
    secret_key: str = ""
    identity_token_audience: Optional[str] = None

    # Base URL of the web client; invitation links are {app_url}/join/{token}
    app_url: str = "http://localhost:3000"

    def __init__(self) -> None:
        self.app_name = os.getenv("APP_NAME", self.app_name)
        self.debug = os.getenv("DEBUG", "false").lower() == "true"

        default_user = os.getenv("PGUSER") or os.getenv("USER") or "postgres"
        default_url = (
            f"postgresql+psycopg://{default_user}:"
            f"{os.getenv('PGPASSWORD', '')}@"
            f"{os.getenv('PGHOST', 'localhost')}:"
            f"{os.getenv('PGPORT', '5432')}/"
            f"{os.getenv('PGDATABASE', 'notespace_dev')}"
        )
        raw_url = os.getenv("DATABASE_URL", default_url)
        # Ensure psycopg3 driver if URL uses generic postgresql://
        if raw_url.startswith("postgresql://") and not raw_url.startswith("postgresql+psycopg"):
            raw_url = raw_url.replace("postgresql://", "postgresql+psycopg://", 1)
        self.database_url = raw_url
        self.db_connect_timeout = int(os.getenv("DB_CONNECT_TIMEOUT", str(self.db_connect_timeout)))

        self.secret_key = os.getenv("SECRET_KEY", "")
        self.identity_token_audience = os.getenv("IDENTITY_TOKEN_AUDIENCE") or None

        # Trailing slash stripped so links never contain "//join"
        self.app_url = os.getenv("APP_URL", self.app_url).rstrip("/")
