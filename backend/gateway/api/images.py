"""
Image proxy endpoints.

Images are served through this service rather than linked on Drive, so
clients never depend on Drive's sharing URLs or cookies.
"""
import logging
import time
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse

from gateway.config import settings
from gateway.schemas.image import DeleteResponse
from gateway.storage.drive_client import DriveClient, get_drive_client
from gateway.storage.errors import DriveError, DriveFileNotFoundError
from gateway.utils.logging import log_image_deleted

logger = logging.getLogger(__name__)

router = APIRouter()


def _relay_chunks(first_chunk: bytes, chunks: Iterator[bytes], file_id: str) -> Iterator[bytes]:
    """Relay Drive chunks; headers are already sent, so failures can only abort the body."""
    if first_chunk:
        yield first_chunk
    try:
        yield from chunks
    except DriveError as e:
        logger.error(
            f"Stream error for {file_id}: {e}",
            extra={"event": "image_stream_failed", "file_id": file_id, "error": str(e)}
        )
        raise


@router.get("/image/{file_id}")
async def get_image(
    file_id: str,
    drive: DriveClient = Depends(get_drive_client)
):
    """
    Stream an image from Google Drive.

    Content-Type comes from the Drive metadata. Responses are cacheable for
    IMAGE_CACHE_MAX_AGE seconds since a file id never changes content.
    The first media chunk is fetched before responding so a refused
    download still maps to 404/500.
    """
    chunks = drive.iter_content(file_id)
    try:
        metadata = await run_in_threadpool(drive.get_metadata, file_id)
        first_chunk = await run_in_threadpool(next, chunks, b"")
    except DriveFileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Image not found or access denied"
        )
    except DriveError as e:
        logger.error(
            f"Error serving image: {str(e)}",
            extra={"event": "image_lookup_failed", "file_id": file_id, "error": str(e)}
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load image"
        )

    return StreamingResponse(
        _relay_chunks(first_chunk, chunks, file_id),
        media_type=metadata.mime_type,
        headers={"Cache-Control": f"public, max-age={settings.image_cache_max_age}"}
    )


@router.delete("/image/{file_id}", response_model=DeleteResponse)
async def delete_image(
    file_id: str,
    drive: DriveClient = Depends(get_drive_client)
):
    """
    Delete an image from Google Drive.

    Any provider failure, including an unknown id, returns 500.
    """
    start_time = time.time()
    try:
        await run_in_threadpool(drive.delete_file, file_id)
    except DriveError as e:
        logger.error(
            f"Error deleting file: {str(e)}",
            extra={"event": "image_delete_failed", "file_id": file_id, "error": str(e)}
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete file"
        )

    log_image_deleted(logger, file_id=file_id, duration_ms=(time.time() - start_time) * 1000)
    return DeleteResponse(message="File deleted successfully")
