"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


DEFAULT_SESSION_SECRET = "videoshare-secret"


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Session
    SESSION_SECRET: str = DEFAULT_SESSION_SECRET
    SESSION_COOKIE: str = "videoshare_session"
    SESSION_MAX_AGE: int = 24 * 60 * 60  # 24 hours

    # Seed admin account
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    # Environment
    ENVIRONMENT: str = "development"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    # File storage
    UPLOADS_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 500 * 1024 * 1024  # 500MB
    UPLOAD_CHUNK_SIZE: int = 1024 * 1024
    STREAM_CHUNK_SIZE: int = 64 * 1024
    STREAM_CONTENT_TYPE: str = "video/mp4"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        if not self.CORS_ORIGINS:
            return []
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        return list(dict.fromkeys(origins))


def validate_settings(settings: Settings) -> None:
    """Validate critical application settings"""
    if settings.is_production and settings.SESSION_SECRET == DEFAULT_SESSION_SECRET:
        raise ValueError("SESSION_SECRET must be changed in production")

    if settings.MAX_UPLOAD_SIZE <= 0:
        raise ValueError("MAX_UPLOAD_SIZE must be positive")

    if settings.STREAM_CHUNK_SIZE <= 0:
        raise ValueError("STREAM_CHUNK_SIZE must be positive")


settings = Settings()
