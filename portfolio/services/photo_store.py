"""
Photo store: read access to the photos table for the gallery.
Applies the category filter, date ordering and page slicing, counts matches,
and converts rows into Photo read models with resolved display URLs.
"""
import logging
import time
from typing import Dict, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio.config import settings
from portfolio.database import AsyncSessionLocal
from portfolio.models import Photo as PhotoRow
from portfolio.schemas import ALL_CATEGORIES, Photo, PhotoPage, parse_category
from portfolio.services.storage import StorageResolver, get_storage_resolver
from portfolio.utils.pagination import page_range

logger = logging.getLogger(__name__)

# Backend failures degrade to an empty result; anything else is a bug and propagates
FETCH_ERRORS = (SQLAlchemyError, OSError, OverflowError)


def resolve_storage_path(row: PhotoRow) -> str:
    """
    Storage reference for a row: storage_path, else the legacy
    thumbnail_path, else the legacy full_size_path, else empty.
    """
    for candidate in (row.storage_path, row.thumbnail_path, row.full_size_path):
        if candidate:
            return candidate
    return ""


def transform_row(row: PhotoRow, resolver: StorageResolver) -> Photo:
    """
    Convert a photos row into a Photo with its display URL resolved.
    """
    storage_path = resolve_storage_path(row)
    url = resolver.resolve(storage_path) if storage_path else ""

    return Photo(
        id=row.id,
        title=row.title,
        description=row.description,
        category=parse_category(row.category),
        storage_path=storage_path,
        thumbnail=url,
        full_size=url,
        camera=row.camera,
        lens=row.lens,
        aperture=row.aperture,
        shutter_speed=row.shutter_speed,
        iso=row.iso,
        focal_length=row.focal_length,
        location=row.location,
        date_taken=row.date_taken,
    )


def _apply_category_filter(query, category: Optional[str]):
    if category and category != ALL_CATEGORIES:
        query = query.where(PhotoRow.category == category)
    return query


class PhotoStore:
    """
    Gallery read access with a small in-process result cache.

    Photos are ordered by date_taken descending with undated photos last,
    then by created_at descending and id so that page boundaries are stable.

    Query failures are logged here, once, and returned as empty results.
    Callers cannot tell a failed fetch from an empty one.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        resolver: StorageResolver,
        cache_ttl: float = 60.0,
    ):
        self.session_factory = session_factory
        self.resolver = resolver
        self.cache_ttl = cache_ttl
        self._cache: Dict[Tuple, Tuple[float, object]] = {}
        # Bumped by invalidate(); results read under an older generation are not cached
        self._generation = 0

    def invalidate(self) -> None:
        """Drop every cached result. Must be called after any photo mutation."""
        if self._cache:
            logger.debug(f"Invalidating {len(self._cache)} cached gallery result(s)")
        self._cache.clear()
        self._generation += 1

    def _cache_get(self, key: Tuple):
        if self.cache_ttl <= 0:
            return None
        entry = self._cache.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if time.monotonic() - stored_at > self.cache_ttl:
            del self._cache[key]
            return None
        logger.debug(f"Cache hit for {key}")
        return value

    def _cache_put(self, key: Tuple, value, generation: int) -> None:
        if generation != self._generation:
            logger.debug(f"Not caching {key}: invalidated while the query was running")
            return
        if self.cache_ttl > 0:
            self._cache[key] = (time.monotonic(), value)

    async def _count(self, session: AsyncSession, category: Optional[str]) -> int:
        query = _apply_category_filter(select(func.count()).select_from(PhotoRow), category)
        result = await session.execute(query)
        return result.scalar() or 0

    async def fetch(
        self,
        category: Optional[str] = ALL_CATEGORIES,
        page: int = 1,
        page_size: int = 40,
    ) -> PhotoPage:
        """
        Fetch one page of photos and the total number of matching photos.

        Args:
            category: Category to filter on; None or "all" applies no filter
            page: 1-based page number
            page_size: Photos per page

        Returns:
            PhotoPage: the page's photos and the filtered total, or an empty
            page with total 0 if the query failed
        """
        start, end = page_range(page, page_size)
        key = ("fetch", category or ALL_CATEGORIES, page, page_size)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        generation = self._generation
        query = _apply_category_filter(select(PhotoRow), category)
        query = (
            query.order_by(
                PhotoRow.date_taken.desc().nulls_last(),
                PhotoRow.created_at.desc(),
                PhotoRow.id.asc(),
            )
            .offset(start)
            .limit(end - start + 1)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
                total = await self._count(session, category)
        except FETCH_ERRORS as e:
            logger.error(
                f"Failed to fetch photos (category: {category}, page: {page}): {str(e)}",
                exc_info=True
            )
            return PhotoPage(items=[], total=0)

        photo_page = PhotoPage(
            items=[transform_row(row, self.resolver) for row in rows],
            total=total,
        )
        logger.info(
            f"Retrieved {len(photo_page.items)} photos "
            f"(category: {category}, page: {page}, total: {total})"
        )
        self._cache_put(key, photo_page, generation)
        return photo_page

    async def count_only(self, category: Optional[str] = ALL_CATEGORIES) -> int:
        """
        Number of photos matching the category filter, 0 if the query failed.
        """
        key = ("count", category or ALL_CATEGORIES)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        generation = self._generation
        try:
            async with self.session_factory() as session:
                count = await self._count(session, category)
        except FETCH_ERRORS as e:
            logger.error(f"Failed to count photos (category: {category}): {str(e)}", exc_info=True)
            return 0

        self._cache_put(key, count, generation)
        return count

    async def get_by_id(self, photo_id: str) -> Optional[Photo]:
        """
        Fetch a single photo, None if it does not exist or the query failed.
        """
        try:
            async with self.session_factory() as session:
                row = await session.get(PhotoRow, photo_id)
        except FETCH_ERRORS as e:
            logger.error(f"Failed to fetch photo {photo_id}: {str(e)}", exc_info=True)
            return None

        if row is None:
            return None
        return transform_row(row, self.resolver)


_photo_store: Optional[PhotoStore] = None


def get_photo_store() -> PhotoStore:
    """
    FastAPI dependency returning the application's PhotoStore.
    Built lazily on first use from the configured database and storage backend.
    """
    global _photo_store
    if _photo_store is None:
        _photo_store = PhotoStore(
            AsyncSessionLocal,
            get_storage_resolver(settings),
            cache_ttl=settings.PHOTO_CACHE_TTL_SECONDS,
        )
    return _photo_store
