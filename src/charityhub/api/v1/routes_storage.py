"""Stored image management and storage diagnostics routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Query

from charityhub.core.config import settings
from charityhub.models.upload import DeleteImageRequest, DeleteImageResponse, ImageUrlResponse
from charityhub.services.upload.exceptions import ImageStoreError
from charityhub.storage.factory import get_image_store

router = APIRouter(tags=["storage"])
logger = logging.getLogger(__name__)


@router.delete("/upload", response_model=DeleteImageResponse)
async def delete_image(request: DeleteImageRequest = Body(...)) -> DeleteImageResponse:
    """Delete a previously uploaded image."""
    store = get_image_store()
    if not store.configured:
        raise HTTPException(status_code=500, detail="Supabase not configured")

    bucket = request.bucket or settings.DEFAULT_UPLOAD_BUCKET
    try:
        store.delete_image(request.path, bucket=bucket)
    except ImageStoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error during image delete: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e) or "Delete failed")

    return DeleteImageResponse(success=True)


@router.get("/upload/url", response_model=ImageUrlResponse)
async def get_image_url(
    path: str = Query(..., min_length=1),
    bucket: Optional[str] = Query(None),
) -> ImageUrlResponse:
    """Resolve the public URL of a stored image."""
    store = get_image_store()
    try:
        url = store.get_image_url(path, bucket=bucket or settings.DEFAULT_UPLOAD_BUCKET)
    except Exception as e:
        logger.error(f"Failed to resolve image URL: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e) or "URL lookup failed")
    return ImageUrlResponse(url=url)


@router.get("/check-storage")
async def check_storage() -> dict:
    """Report whether the store is configured and which buckets it exposes.

    Always answers 200; problems are described in the body.
    """
    if not settings.supabase_configured:
        return {
            "error": "Supabase not configured",
            "env": {
                "url": "Set" if settings.SUPABASE_URL else "Not set",
                "key": "Set" if settings.SUPABASE_ANON_KEY else "Not set",
            },
        }

    try:
        return get_image_store().check_storage(images_bucket=settings.DEFAULT_UPLOAD_BUCKET)
    except Exception as e:
        logger.error(f"Storage check failed: {e}", exc_info=True)
        return {"error": "Storage check failed", "message": str(e)}
