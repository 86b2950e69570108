# backend/app/core/config.py

import logging
import secrets
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("authgate.config")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = "dev"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./authgate.db"

    # Empty means "not configured": dev gets a generated key, anything else refuses to start
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # pbkdf2_sha256 iteration count
    password_hash_rounds: int = 29000

    # Registration may request any role when enabled (including "admin")
    allow_role_self_assignment: bool = True

    # Comma-separated allowlist, e.g. "https://shop.example.com,http://localhost:3000"
    cors_origins: str = ""

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        if not self.jwt_secret_key:
            if self.debug or self.app_env == "dev":
                self.jwt_secret_key = secrets.token_hex(32)
                logger.warning("Using an auto-generated JWT secret; tokens will not survive a restart.")
            else:
                raise ValueError("JWT_SECRET_KEY is required outside dev mode.")
        if len(self.jwt_secret_key) < 16:
            raise ValueError("JWT_SECRET_KEY must be at least 16 characters.")
        return self

    @property
    def allow_origins(self) -> list[str]:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
