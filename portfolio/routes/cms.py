"""
CMS API routes for photo metadata management.
Edits and deletes photo records and invalidates the gallery cache afterwards.
These routes carry no authentication of their own; they are only mounted
when CMS_ENABLED is set.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from portfolio.database import get_db
from portfolio.models import Photo as PhotoRow
from portfolio.schemas import CmsPhotoResponse, Photo, PhotoUpdate
from portfolio.services.photo_store import PhotoStore, get_photo_store, transform_row

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cms", tags=["CMS"])


def _cms_photo(row: PhotoRow, store: PhotoStore) -> CmsPhotoResponse:
    photo = transform_row(row, store.resolver)
    return CmsPhotoResponse(
        **photo.model_dump(),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


@router.get("/photos", response_model=List[CmsPhotoResponse])
async def get_cms_photos(
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_photo_store),
):
    """
    Get all photos for the CMS dashboard, newest upload first.

    Raises:
        HTTPException: 500 if database query fails
    """
    try:
        result = await db.execute(
            select(PhotoRow).order_by(PhotoRow.created_at.desc(), PhotoRow.id.asc())
        )
        rows = result.scalars().all()
        logger.info(f"Retrieved {len(rows)} photos for CMS")
        return [_cms_photo(row, store) for row in rows]

    except SQLAlchemyError as e:
        logger.error(f"Error fetching CMS photos: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to retrieve photos", "detail": str(e)}
        )


@router.put("/photos/{photo_id}", response_model=Photo)
async def update_cms_photo(
    photo_id: str,
    photo_update: PhotoUpdate,
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_photo_store),
):
    """
    Update photo metadata. Only fields present in the request body change.

    Args:
        photo_id: ID of the photo to update
        photo_update: Metadata fields to change
        db: Database session (injected by FastAPI dependency)
        store: Photo store whose cache is invalidated after the update

    Returns:
        Photo: The updated photo

    Raises:
        HTTPException: 404 if the photo does not exist, 500 if the update fails
    """
    try:
        row = await db.get(PhotoRow, photo_id)
        if row is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Photo not found", "detail": f"No photo with ID {photo_id}"}
            )

        changes = photo_update.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if field == "category" and value is not None:
                value = value.value
            setattr(row, field, value)

        await db.commit()
        await db.refresh(row)
        store.invalidate()

        logger.info(f"Successfully updated photo {photo_id}: {sorted(changes)}")
        return transform_row(row, store.resolver)

    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Error updating photo {photo_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update photo", "detail": str(e)}
        )


@router.delete("/photos/{photo_id}")
async def delete_cms_photo(
    photo_id: str,
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_photo_store),
):
    """
    Delete a photo record. The stored image file is left to the storage backend.

    Raises:
        HTTPException: 404 if the photo does not exist, 500 if deletion fails
    """
    try:
        result = await db.execute(delete(PhotoRow).where(PhotoRow.id == photo_id))
        if result.rowcount == 0:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Photo not found", "detail": f"No photo with ID {photo_id}"}
            )

        await db.commit()
        store.invalidate()

        logger.info(f"Successfully deleted photo {photo_id}")
        return {"message": "Photo deleted successfully", "id": photo_id}

    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Error deleting photo {photo_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete photo", "detail": str(e)}
        )
