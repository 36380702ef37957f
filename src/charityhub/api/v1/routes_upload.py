"""Image upload API routes."""

import logging
from typing import Callable, Optional, Union

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from charityhub.core.config import settings
from charityhub.core.logging import upload_path_context
from charityhub.models.upload import (
    ChainResult,
    RejectionReason,
    UploadImageResponse,
    UploadRequest,
)
from charityhub.services.upload.exceptions import UploadValidationError
from charityhub.services.upload.naming import normalize_folder
from charityhub.services.upload.validator import validate_image
from charityhub.storage.chain import UploadChain
from charityhub.storage.factory import get_fallback_chain, get_upload_chain

router = APIRouter(tags=["upload"])
logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "This is a fallback upload - image storage is unavailable"


async def _build_upload_request(
    file: Union[UploadFile, str, None],
    bucket: Optional[str],
    folder: Optional[str],
    user_id: Optional[str],
) -> UploadRequest:
    """Check preconditions and read the file into an UploadRequest.

    Size and type are validated before the body is read into memory.

    Raises:
        UploadValidationError: If the file is missing or breaks the image policy
    """
    # A plain text field named "file" is not an upload
    if not isinstance(file, StarletteUploadFile):
        raise UploadValidationError(RejectionReason.MISSING_FILE)

    file.file.seek(0, 2)
    size_bytes = file.file.tell()
    file.file.seek(0)

    verdict = validate_image(file.content_type, size_bytes)
    if not verdict.accepted:
        raise UploadValidationError(verdict.reason)

    content = await file.read()

    return UploadRequest(
        content=content,
        content_type=file.content_type,
        size_bytes=size_bytes,
        filename=file.filename or "upload",
        bucket=(bucket or "").strip() or settings.DEFAULT_UPLOAD_BUCKET,
        folder=normalize_folder(folder, default=settings.DEFAULT_UPLOAD_FOLDER),
        user_id=(user_id or "").strip() or None,
    )


async def _handle_upload(
    chain_factory: Callable[[], UploadChain],
    file: Union[UploadFile, str, None],
    bucket: Optional[str],
    folder: Optional[str],
    user_id: Optional[str],
) -> UploadImageResponse:
    try:
        request = await _build_upload_request(file, bucket, folder, user_id)
        result: ChainResult = await chain_factory().upload(request)
    except UploadValidationError as e:
        raise HTTPException(status_code=400, detail=e.reason.message)
    except Exception as e:
        logger.error(f"Unexpected error during upload: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e) or "Upload failed")

    upload_path_context.set(result.path)
    logger.info(
        f"Upload completed: strategy={result.strategy}, bucket={request.bucket}, "
        f"size={request.size_bytes}, user_id={request.user_id}"
    )

    return UploadImageResponse(
        url=result.url,
        path=result.path,
        message=FALLBACK_MESSAGE if result.is_placeholder else None,
    )


@router.post(
    "/upload",
    response_model=UploadImageResponse,
    response_model_exclude_none=True,
)
async def upload_image(
    file: Union[UploadFile, str, None] = File(None),
    bucket: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    user_id: Optional[str] = Form(None, alias="userId"),
) -> UploadImageResponse:
    """Upload an image, falling back to a placeholder when storage is down."""
    return await _handle_upload(get_upload_chain, file, bucket, folder, user_id)


@router.post(
    "/upload-fallback",
    response_model=UploadImageResponse,
    response_model_exclude_none=True,
)
async def upload_image_fallback(
    file: Union[UploadFile, str, None] = File(None),
    bucket: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    user_id: Optional[str] = Form(None, alias="userId"),
) -> UploadImageResponse:
    """Validate an image and answer with a placeholder without touching storage."""
    return await _handle_upload(get_fallback_chain, file, bucket, folder, user_id)
