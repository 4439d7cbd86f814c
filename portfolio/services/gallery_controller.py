"""
Gallery state and its controller.

The gallery state (category filter and page) lives in the query string of
the gallery URL so that every view is shareable. The controller keeps that
query string as its only copy of the state, routes every change through
set_category/set_page, and refetches photos when the state changes.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional
from urllib.parse import parse_qs, urlencode

from portfolio.schemas import ALL_CATEGORIES, Photo, PhotoCategory, parse_category
from portfolio.services.photo_store import PhotoStore
from portfolio.utils.masonry import distribute
from portfolio.utils.pagination import PageEntry, page_window, total_pages

logger = logging.getLogger(__name__)

CATEGORY_FILTERS = (ALL_CATEGORIES,) + tuple(c.value for c in PhotoCategory)

# Larger page numbers in a URL are treated as malformed
MAX_PAGE = 1_000_000


@dataclass(frozen=True)
class GalleryState:
    category: str = ALL_CATEGORIES
    page: int = 1

    def __post_init__(self):
        if self.category not in CATEGORY_FILTERS:
            raise ValueError(f"Unknown category: {self.category}")
        if self.page < 1:
            raise ValueError("page must be >= 1")


def _parse_page(raw: Optional[str]) -> int:
    if raw is None:
        return 1
    try:
        page = int(raw)
    except ValueError:
        return 1
    return page if 1 <= page <= MAX_PAGE else 1


def decode_location(query_string: str) -> GalleryState:
    """
    Decode gallery state from a URL query string.

    Unknown or missing categories fall back to "all"; missing, non-integer,
    non-positive or implausibly large pages fall back to 1.
    """
    params = parse_qs(query_string.lstrip("?"), keep_blank_values=True)

    category = parse_category((params.get("category") or [None])[0])
    page = _parse_page((params.get("page") or [None])[0])

    return GalleryState(
        category=category.value if category else ALL_CATEGORIES,
        page=page,
    )


def encode_location(state: GalleryState) -> str:
    """
    Canonical query string for state.
    The "all" category and page 1 are omitted, so the default state is "".
    """
    params = []
    if state.category != ALL_CATEGORIES:
        params.append(("category", state.category))
    if state.page != 1:
        params.append(("page", str(state.page)))
    return urlencode(params)


def _href(query: str, base_path: str) -> str:
    return f"{base_path}?{query}" if query else base_path


def page_href(state: GalleryState, page: int, base_path: str = "/") -> str:
    """Link to page within the category of state."""
    return _href(encode_location(GalleryState(category=state.category, page=page)), base_path)


def category_href(category: str, base_path: str = "/") -> str:
    """Link to the first page of category."""
    return _href(encode_location(GalleryState(category=category, page=1)), base_path)


class GalleryController:
    """
    Owns the gallery state for one gallery view.

    Only the result of the most recently issued fetch is applied; a slower
    response to an earlier request is dropped when it arrives.
    """

    def __init__(
        self,
        store: PhotoStore,
        location: str = "",
        page_size: int = 40,
        on_navigate: Optional[Callable[[str], None]] = None,
    ):
        if page_size <= 0:
            raise ValueError("page_size must be > 0")
        self.store = store
        self.page_size = page_size
        self.on_navigate = on_navigate
        # Canonical form of whatever the caller passed in
        self._location = encode_location(decode_location(location))

        self.items: List[Photo] = []
        self.total = 0
        self.loading = False
        self._request_seq = 0

    @property
    def location(self) -> str:
        return self._location

    @property
    def state(self) -> GalleryState:
        return decode_location(self._location)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @property
    def page_window(self) -> List[PageEntry]:
        return page_window(self.state.page, self.total_pages)

    def columns(self, column_count: int) -> List[List[Photo]]:
        return distribute(self.items, column_count)

    def _navigate(self, state: GalleryState) -> None:
        self._location = encode_location(state)
        if self.on_navigate is not None:
            self.on_navigate(self._location)

    async def refresh(self) -> bool:
        """
        Fetch photos for the current state.

        Returns:
            bool: True if the result was applied, False if a newer request
            superseded it while it was in flight
        """
        self._request_seq += 1
        request_id = self._request_seq
        state = self.state
        self.loading = True

        try:
            result = await self.store.fetch(state.category, state.page, self.page_size)
        finally:
            if request_id == self._request_seq:
                self.loading = False

        if request_id != self._request_seq:
            logger.debug(
                f"Discarding stale gallery response #{request_id} "
                f"(latest: #{self._request_seq})"
            )
            return False

        self.items = list(result.items)
        self.total = result.total
        return True

    async def set_category(self, category: str) -> bool:
        """
        Switch the category filter and go back to page 1.

        Returns:
            bool: False if category is unknown or already active
        """
        if category not in CATEGORY_FILTERS:
            logger.debug(f"Ignoring unknown category: {category}")
            return False
        if category == self.state.category:
            return False

        self._navigate(GalleryState(category=category, page=1))
        await self.refresh()
        return True

    async def set_page(self, page: int) -> bool:
        """
        Move to page within the current category.

        Returns:
            bool: False if page is outside 1..total_pages or already current
        """
        current = self.state
        if page < 1 or page > self.total_pages or page == current.page:
            logger.debug(f"Ignoring page request {page} (total pages: {self.total_pages})")
            return False

        self._navigate(GalleryState(category=current.category, page=page))
        await self.refresh()
        return True
