"""
Storage reference resolution.
Turns the opaque storage path saved on a photo row into a display URL,
either against a public storage bucket or through Cloudinary delivery URLs.
"""
import logging
from typing import Optional, Protocol
from urllib.parse import quote

import cloudinary

from portfolio.config import Settings

logger = logging.getLogger(__name__)


class StorageResolver(Protocol):
    def resolve(self, storage_path: str) -> str:
        ...


class PublicBucketResolver:
    """
    Resolves storage paths against a public bucket:
    {base_url}/storage/v1/object/public/{bucket}/{storage_path}
    """

    def __init__(self, base_url: str, bucket: str = "photos"):
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket

    def resolve(self, storage_path: str) -> str:
        # Never fabricate a URL without both halves
        if not storage_path or not self.base_url:
            return ""
        path = quote(storage_path.lstrip("/"), safe="/")
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path}"


class CloudinaryResolver:
    """
    Treats storage paths as Cloudinary public ids and builds optimized delivery URLs.
    """

    def __init__(
        self,
        cloud_name: str,
        width: Optional[int] = None,
        quality: str = "auto",
        fetch_format: str = "auto",
    ):
        self.cloud_name = cloud_name
        self.width = width
        self.quality = quality
        self.fetch_format = fetch_format

    def resolve(self, storage_path: str) -> str:
        if not storage_path or not self.cloud_name:
            return ""

        transformation = []
        if self.width:
            transformation.append({"width": self.width, "crop": "limit"})

        # Automatic quality and format optimization
        transformation.append({
            "quality": self.quality,
            "fetch_format": self.fetch_format
        })

        return cloudinary.CloudinaryImage(storage_path).build_url(
            cloud_name=self.cloud_name,
            transformation=transformation,
            secure=True
        )


def get_storage_resolver(settings: Settings) -> StorageResolver:
    """
    Build the resolver selected by STORAGE_BACKEND.

    Raises:
        ValueError: If STORAGE_BACKEND is not a known backend
    """
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "bucket":
        if not settings.STORAGE_BASE_URL:
            logger.warning("STORAGE_BASE_URL not configured, photo URLs will be empty")
        return PublicBucketResolver(settings.STORAGE_BASE_URL, settings.STORAGE_BUCKET)
    if backend == "cloudinary":
        if not settings.CLOUDINARY_CLOUD_NAME:
            logger.warning("CLOUDINARY_CLOUD_NAME not configured, photo URLs will be empty")
        return CloudinaryResolver(settings.CLOUDINARY_CLOUD_NAME)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")


def validate_storage_config(settings: Settings) -> bool:
    """
    Check that the selected storage backend has what it needs to build URLs.
    """
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "bucket":
        return bool(settings.STORAGE_BASE_URL)
    if backend == "cloudinary":
        return bool(settings.CLOUDINARY_CLOUD_NAME)
    return False
