"""
Configuration management for the portfolio gallery API.
Uses Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Photo Portfolio API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Backend API for a paginated, filterable photo portfolio gallery"

    # CORS Configuration
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    # Database Configuration
    # Empty means an in-memory SQLite database (development only)
    DATABASE_URL: str = ""

    # Storage Configuration
    # "bucket" resolves storage paths against a public bucket URL,
    # "cloudinary" treats them as Cloudinary public ids
    STORAGE_BACKEND: str = "bucket"
    STORAGE_BASE_URL: str = ""
    STORAGE_BUCKET: str = "photos"
    CLOUDINARY_CLOUD_NAME: str = ""

    # Gallery Configuration
    PHOTOS_PER_PAGE: int = 40
    # Seconds a fetched page stays cached; 0 disables the cache
    PHOTO_CACHE_TTL_SECONDS: float = 60.0

    # Metadata edit/delete endpoints. Keep disabled unless the deployment
    # authenticates requests in front of /api/cms.
    CMS_ENABLED: bool = False

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Global settings instance
settings = Settings()
