"""Shared builders and in-memory stores for the test suite."""
import asyncio
from datetime import date, timedelta
from typing import List, Optional

from portfolio.models import Photo as PhotoRow
from portfolio.schemas import ALL_CATEGORIES, Photo, PhotoPage
from portfolio.services.storage import PublicBucketResolver
from portfolio.utils.pagination import page_range

STORAGE_BASE_URL = "https://cdn.example.com"


async def add_rows(session_factory, rows: List[PhotoRow]) -> None:
    async with session_factory() as session:
        session.add_all(rows)
        await session.commit()


def make_row(
    photo_id: str,
    category: Optional[str] = None,
    date_taken: Optional[date] = None,
    storage_path: Optional[str] = None,
    **kwargs,
) -> PhotoRow:
    return PhotoRow(
        id=photo_id,
        title=kwargs.pop("title", photo_id),
        category=category,
        date_taken=date_taken,
        storage_path=storage_path if storage_path is not None else f"{photo_id}.jpg",
        **kwargs,
    )


def dated_rows(prefix: str, count: int, category: Optional[str], start: date = date(2024, 1, 1)) -> List[PhotoRow]:
    """count rows named {prefix}-00.. with strictly increasing date_taken."""
    return [
        make_row(f"{prefix}-{i:02d}", category=category, date_taken=start + timedelta(days=i))
        for i in range(count)
    ]


def make_photo(photo_id: str, category: Optional[str] = None) -> Photo:
    return Photo(id=photo_id, title=photo_id, category=category)


class FakeStore:
    """In-memory stand-in for PhotoStore; photos are served in list order."""

    def __init__(self, photos: List[Photo]):
        self.photos = photos
        self.resolver = PublicBucketResolver(STORAGE_BASE_URL, "photos")
        self.calls = []
        self.invalidations = 0

    def _matching(self, category):
        if category in (None, ALL_CATEGORIES):
            return list(self.photos)
        return [p for p in self.photos if p.category == category]

    async def fetch(self, category=ALL_CATEGORIES, page=1, page_size=40) -> PhotoPage:
        self.calls.append((category, page, page_size))
        matching = self._matching(category)
        start, end = page_range(page, page_size)
        return PhotoPage(items=matching[start:end + 1], total=len(matching))

    async def count_only(self, category=ALL_CATEGORIES) -> int:
        return len(self._matching(category))

    async def get_by_id(self, photo_id):
        return next((p for p in self.photos if p.id == photo_id), None)

    def invalidate(self):
        self.invalidations += 1


class GatedStore(FakeStore):
    """FakeStore whose fetches block until the test releases them, one gate per call."""

    def __init__(self, photos: List[Photo]):
        super().__init__(photos)
        self.gates: List[asyncio.Event] = []

    async def fetch(self, category=ALL_CATEGORIES, page=1, page_size=40) -> PhotoPage:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return await super().fetch(category, page, page_size)
