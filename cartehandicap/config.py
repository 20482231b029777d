"""Application configuration"""

import logging
import secrets
from dataclasses import dataclass, field
from os import getenv
from pathlib import Path

logger = logging.getLogger(__name__)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _secret_key() -> str:
    secret_key = getenv("CARTEHANDICAP_SECRET_KEY", "")
    if not secret_key:
        logger.warning(
            "CARTEHANDICAP_SECRET_KEY is not set, using a random key. "
            "Login tokens will not survive a restart."
        )
        secret_key = secrets.token_urlsafe(32)
    return secret_key


_SECRET_KEY = _secret_key()


@dataclass
class Config:
    app_name: str = "cartehandicap"
    app_version: str = "0.1.0"

    secret_key: str = field(default=_SECRET_KEY)

    # tokens accepted in the x-token header of administrator routes
    admin_tokens: list[str] = field(
        default_factory=lambda: _split_list(getenv("CARTEHANDICAP_ADMIN_TOKENS", ""))
    )
    cors_origins: list[str] = field(
        default_factory=lambda: _split_list(getenv("CARTEHANDICAP_CORS_ORIGINS", "*"))
    )

    upload_dir: Path = field(
        default=Path(getenv("CARTEHANDICAP_UPLOAD_DIR", "./uploads"))
    )
    max_document_size: int = 5 * 1024 * 1024

    # Optional database URL for Postgres or other databases
    database_url_env: str | None = field(
        default=getenv("CARTEHANDICAP_DATABASE_URL", None)
    )

    @property
    def database_path(self) -> Path:
        return Path("./data/") / Path(f"{self.app_name}.db")

    @property
    def database_url(self) -> str:
        # Use provided DATABASE_URL if available, else fall back to SQLite file
        if self.database_url_env:
            return self.database_url_env
        return f"sqlite:///{self.database_path}"

    @property
    def documents_dir(self) -> Path:
        return self.upload_dir / "documents"


def get_config():
    return Config()
