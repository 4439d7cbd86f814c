"""
Gallery routes for the public photo portfolio.
Serves the paginated, filterable gallery view model and single photo lookups.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from typing import List, Optional
import logging

from portfolio.config import settings
from portfolio.schemas import (
    ALL_CATEGORIES,
    CATEGORY_LABELS,
    CategoryChip,
    GalleryResponse,
    PageLink,
    PaginationResponse,
    Photo,
    PhotoCountResponse,
)
from portfolio.services.gallery_controller import (
    CATEGORY_FILTERS,
    GalleryController,
    category_href,
    page_href,
)
from portfolio.services.photo_store import PhotoStore, get_photo_store
from portfolio.utils.masonry import MAX_COLUMNS, columns_for_width
from portfolio.utils.pagination import ELLIPSIS

logger = logging.getLogger(__name__)

router = APIRouter()

# Path of the frontend gallery page that pagination and filter links point to
GALLERY_BASE_PATH = "/"

EMPTY_MESSAGE = "No photos found in this category."


def _category_chips(active: str) -> List[CategoryChip]:
    return [
        CategoryChip(
            id=category,
            label=CATEGORY_LABELS[category],
            active=category == active,
            href=category_href(category, GALLERY_BASE_PATH),
        )
        for category in CATEGORY_FILTERS
    ]


def _pagination(controller: GalleryController) -> Optional[PaginationResponse]:
    state = controller.state
    pages = controller.total_pages
    window = controller.page_window
    if not window:
        return None

    entries = []
    for entry in window:
        if entry == ELLIPSIS:
            entries.append(PageLink(kind="ellipsis"))
        else:
            entries.append(PageLink(
                kind="page",
                page=entry,
                href=page_href(state, entry, GALLERY_BASE_PATH),
                current=entry == state.page,
            ))

    return PaginationResponse(
        current_page=state.page,
        total_pages=pages,
        entries=entries,
        previous_href=page_href(state, state.page - 1, GALLERY_BASE_PATH) if state.page > 1 else None,
        next_href=page_href(state, state.page + 1, GALLERY_BASE_PATH) if state.page < pages else None,
    )


def build_gallery_response(controller: GalleryController, column_count: int) -> GalleryResponse:
    """
    Assemble the render-ready gallery page from a loaded controller.
    """
    state = controller.state
    items = controller.items

    return GalleryResponse(
        category=state.category,
        page=state.page,
        page_size=controller.page_size,
        total=controller.total,
        total_pages=controller.total_pages,
        location=controller.location,
        summary=f"Showing {len(items)} of {controller.total} photos",
        empty_message=None if items else EMPTY_MESSAGE,
        categories=_category_chips(state.category),
        columns=controller.columns(column_count),
        pagination=_pagination(controller),
    )


@router.get("/gallery", response_model=GalleryResponse)
async def get_gallery(
    request: Request,
    columns: Optional[int] = Query(None, ge=1, le=6, description="Explicit column count"),
    viewport_width: Optional[int] = Query(None, ge=1, description="Viewport width in px, used when columns is not given"),
    store: PhotoStore = Depends(get_photo_store),
):
    """
    Get one page of the gallery laid out in masonry columns.

    The category and page query parameters are decoded leniently: unknown
    categories show all photos and invalid pages show page 1.

    Args:
        request: Incoming request; its query string carries the gallery state
        columns: Number of masonry columns (1-6)
        viewport_width: Viewport width used to pick the column count
        store: Photo store (injected by FastAPI dependency)

    Returns:
        GalleryResponse: Photos in columns plus filter chips and pagination links
    """
    if columns is not None:
        column_count = columns
    elif viewport_width is not None:
        column_count = columns_for_width(viewport_width)
    else:
        column_count = MAX_COLUMNS

    controller = GalleryController(
        store,
        location=request.url.query,
        page_size=settings.PHOTOS_PER_PAGE,
    )
    await controller.refresh()

    logger.info(
        f"Serving gallery (location: '{controller.location}', "
        f"items: {len(controller.items)}, columns: {column_count})"
    )
    return build_gallery_response(controller, column_count)


@router.get("/photos/count", response_model=PhotoCountResponse)
async def get_photo_count(
    category: Optional[str] = None,
    store: PhotoStore = Depends(get_photo_store),
):
    """
    Count photos in a category; unknown or missing categories count all photos.
    """
    if category not in CATEGORY_FILTERS:
        category = ALL_CATEGORIES
    count = await store.count_only(category)
    return PhotoCountResponse(category=category, count=count)


@router.get("/photos/{photo_id}", response_model=Photo)
async def get_photo(
    photo_id: str,
    store: PhotoStore = Depends(get_photo_store),
):
    """
    Get a single photo with its display URL.

    Raises:
        HTTPException: 404 if the photo does not exist
    """
    photo = await store.get_by_id(photo_id)
    if photo is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Photo not found", "detail": f"No photo with ID {photo_id}"}
        )
    return photo
