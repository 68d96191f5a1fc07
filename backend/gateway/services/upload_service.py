"""
Image upload service.

Flow:
1. Route reads the multipart file into memory and checks its size
2. Service names the file and uploads the bytes to Drive
3. Service grants public read access on the new file
4. Service builds the proxy URL the client should display
"""
import logging
import time
from typing import Optional, Tuple

from gateway.config import settings
from gateway.storage.drive_client import DriveClient
from gateway.storage.models import UploadedFile

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class UploadService:
    """
    Service for handling image uploads.

    Responsibilities:
    - Generate Drive display names
    - Create the remote file and its public-read grant
    - Build proxy URLs
    """

    @staticmethod
    def build_display_name(original_name: Optional[str], now_ms: Optional[int] = None) -> str:
        """
        Prefix the client's file name with the upload time in epoch milliseconds.

        Args:
            original_name: Name sent by the client (may be empty)
            now_ms: Override for the timestamp

        Returns:
            Name such as "1718000000000_photo.jpg"
        """
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return f"{now_ms}_{original_name or 'upload'}"

    @staticmethod
    def build_display_url(file_id: str) -> str:
        """Proxy URL served by GET /image/{file_id}."""
        return f"{settings.public_base_url}/image/{file_id}"

    @staticmethod
    def upload_image(
        drive: DriveClient,
        data: bytes,
        original_name: Optional[str],
        mime_type: Optional[str]
    ) -> Tuple[UploadedFile, str]:
        """
        Upload an image and make it publicly readable.

        Blocking: call from a worker thread inside request handlers.

        Args:
            drive: Drive client
            data: Image bytes
            original_name: Client-side file name
            mime_type: Declared MIME type

        Returns:
            Tuple of (uploaded_file, display_url)

        Raises:
            DriveError: If either provider call fails. A file whose permission
                grant failed is left in Drive; it is still served by the proxy.
        """
        name = UploadService.build_display_name(original_name)
        uploaded = drive.upload_file(data, name=name, mime_type=mime_type or DEFAULT_MIME_TYPE)
        drive.make_public(uploaded.file_id)

        display_url = UploadService.build_display_url(uploaded.file_id)
        logger.debug(f"Uploaded {name} as {uploaded.file_id}")
        return uploaded, display_url
