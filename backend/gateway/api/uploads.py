"""
Upload endpoint.

POST /upload takes a single multipart field named "image", holds it in
memory, and forwards it to Google Drive. The response carries the proxy URL
the client should display, never a Drive URL.
"""
import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from gateway.config import settings
from gateway.schemas.image import UploadResponse
from gateway.services.upload_service import UploadService
from gateway.storage.drive_client import DriveClient, get_drive_client
from gateway.utils.logging import log_upload_completed
from gateway.utils.metrics import upload_bytes, uploads_total

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    drive: DriveClient = Depends(get_drive_client)
):
    """
    Upload an image to Google Drive and make it publicly readable.

    Returns 400 without a file, 413 above MAX_UPLOAD_BYTES, and 500 for any
    provider failure. Nothing is retried.
    """
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file"
        )

    # The multipart body is already spooled by Starlette; read one byte past the limit to detect oversize
    data = await image.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large (limit {settings.max_upload_bytes} bytes)"
        )

    start_time = time.time()
    try:
        uploaded, display_url = await run_in_threadpool(
            UploadService.upload_image,
            drive,
            data,
            image.filename,
            image.content_type
        )
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"Upload error: {str(e)}",
            extra={
                "event": "upload_failed",
                "file_name": image.filename,
                "duration_ms": round(duration_ms, 2),
                "error": str(e)
            },
            exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed"
        )

    uploads_total.inc()
    upload_bytes.observe(len(data))
    log_upload_completed(
        logger,
        file_id=uploaded.file_id,
        size_bytes=len(data),
        duration_ms=(time.time() - start_time) * 1000,
        mime_type=uploaded.mime_type
    )

    return UploadResponse(
        message="Uploaded",
        file_id=uploaded.file_id,
        display_url=display_url
    )
