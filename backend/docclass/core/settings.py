from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database settings
    database_url: str = "sqlite:///./docclass.db"

    # Redis/Celery settings
    redis_url: str = "redis://localhost:6379/0"

    # Upload settings
    max_upload_size: int = 10 * 1024 * 1024  # 10MB
    auto_classify_on_upload: bool = False

    # Application settings
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    debug: bool = False
    environment: str = "development"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def sync_database_url(self) -> str:
        """Get the database URL with the asyncpg driver swapped for the sync psycopg2 one"""
        if self.database_url.startswith("postgresql+asyncpg://"):
            return self.database_url.replace("postgresql+asyncpg://", "postgresql://")
        return self.database_url


# Global settings instance
def get_settings() -> Settings:
    """Get application settings instance"""
    return Settings()
