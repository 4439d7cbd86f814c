"""
Pydantic schemas for request and response data validation.
Defines the photo read model, the metadata edit payload and the gallery view model.
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from typing import Optional, List, Literal


class PhotoCategory(str, Enum):
    """Closed set of categories a photo can be filed under."""
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    STREET = "street"
    NATURE = "nature"
    ARCHITECTURE = "architecture"


# Filter sentinel meaning "no category filter"
ALL_CATEGORIES = "all"

CATEGORY_LABELS = {
    ALL_CATEGORIES: "All",
    PhotoCategory.LANDSCAPE.value: "Landscape",
    PhotoCategory.PORTRAIT.value: "Portrait",
    PhotoCategory.STREET.value: "Street",
    PhotoCategory.NATURE.value: "Nature",
    PhotoCategory.ARCHITECTURE.value: "Architecture",
}


def parse_category(value: Optional[str]) -> Optional[PhotoCategory]:
    """Return the PhotoCategory for value, or None if unset or not in the closed set."""
    if not value:
        return None
    try:
        return PhotoCategory(value)
    except ValueError:
        return None


class Photo(BaseModel):
    """
    Photo read model served to the gallery.
    thumbnail and full_size hold the same resolved display URL; both are
    empty when the row has no storage reference.
    """
    id: str
    title: str
    description: Optional[str] = None
    category: Optional[PhotoCategory] = None
    storage_path: str = ""
    thumbnail: str = ""
    full_size: str = ""
    camera: Optional[str] = None
    lens: Optional[str] = None
    aperture: Optional[str] = None
    shutter_speed: Optional[str] = None
    iso: Optional[str] = None
    focal_length: Optional[str] = None
    location: Optional[str] = None
    date_taken: Optional[date] = None

    model_config = ConfigDict(frozen=True)


class PhotoPage(BaseModel):
    """
    One page of photos plus the total number of photos matching the filter.
    """
    items: List[Photo] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class CmsPhotoResponse(Photo):
    """
    Photo as listed in the CMS, with bookkeeping timestamps.
    """
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PhotoUpdate(BaseModel):
    """
    Request schema for editing photo metadata.
    Used by PUT /api/cms/photos/{photo_id}. Only fields present in the body are applied.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[PhotoCategory] = None
    camera: Optional[str] = None
    lens: Optional[str] = None
    aperture: Optional[str] = None
    shutter_speed: Optional[str] = None
    iso: Optional[str] = None
    focal_length: Optional[str] = None
    location: Optional[str] = None
    date_taken: Optional[date] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if v is None:
            raise ValueError('Title cannot be null')
        v = v.strip()
        if not v:
            raise ValueError('Title cannot be empty')
        return v


class PhotoCountResponse(BaseModel):
    category: str
    count: int


class CategoryChip(BaseModel):
    """Filter chip for one category (or "all")."""
    id: str
    label: str
    active: bool
    href: str


class PageLink(BaseModel):
    """
    One entry of the pagination control: either a page link or an ellipsis marker.
    """
    kind: Literal["page", "ellipsis"]
    page: Optional[int] = None
    href: Optional[str] = None
    current: bool = False


class PaginationResponse(BaseModel):
    current_page: int
    total_pages: int
    entries: List[PageLink]
    previous_href: Optional[str] = None
    next_href: Optional[str] = None


class GalleryResponse(BaseModel):
    """
    Render-ready gallery page.
    pagination is null when there is at most one page.
    """
    category: str
    page: int
    page_size: int
    total: int
    total_pages: int
    location: str
    summary: str
    empty_message: Optional[str] = None
    categories: List[CategoryChip]
    columns: List[List[Photo]]
    pagination: Optional[PaginationResponse] = None
