"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./identity.db"
    db_create_all: bool = True

    # Security
    jwt_secret: Optional[str] = None  # Login fails with 500 while unset
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 120
    bcrypt_rounds: int = 12
    login_reveal_unknown_email: bool = True

    # Object storage (MinIO / S3)
    storage_backend: str = "s3"  # s3 | memory
    minio_endpoint: str = "minio"
    minio_port: int = 9000
    minio_use_ssl: bool = False
    minio_access_key: str = ""
    minio_secret_key: str = ""
    minio_bucket: str = "documents"
    minio_region: str = "us-east-1"
    storage_create_bucket: bool = False

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    project_name: str = "Identity & Document Core"
    version: str = "1.0.0"

    @property
    def storage_endpoint_url(self) -> str:
        """Endpoint URL for the object store client."""
        scheme = "https" if self.minio_use_ssl else "http"
        return f"{scheme}://{self.minio_endpoint}:{self.minio_port}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
