"""
Google Drive v3 storage client.

Wraps googleapiclient with the operator's refresh token. The access token is
refreshed transparently by google-auth whenever a request needs one.

Every provider failure is translated into a DriveError subclass so route
handlers can map it to an HTTP status without knowing about googleapiclient.
"""
import io
import logging
import time
from typing import Iterator, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload, MediaIoBaseUpload

from gateway.config import settings
from gateway.storage.errors import DriveError, DriveFileNotFoundError, DriveNotConfiguredError
from gateway.storage.models import FileMetadata, UploadedFile
from gateway.utils.logging import log_provider_failure, log_provider_request
from gateway.utils.metrics import (
    drive_failures_total,
    drive_request_duration_seconds,
    drive_requests_total,
)

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"

# Only files created by this app are visible to it
DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive.file"]

# Drive answers 403 for files the token cannot see and 404 for unknown ids
NOT_FOUND_STATUSES = (403, 404)


class DriveClient:
    """
    Thin client over the Drive v3 files and permissions resources.

    Built once at startup from GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and
    GOOGLE_REFRESH_TOKEN. A client built without a refresh token stays
    unconfigured and raises DriveNotConfiguredError on every call.
    """

    def __init__(self):
        self._service = None
        self._configured = False

        if not settings.google_refresh_token:
            logger.warning(
                "GOOGLE_REFRESH_TOKEN is missing. Upload APIs will fail. "
                "Visit /auth to obtain one."
            )
            return

        if not all([settings.google_client_id, settings.google_client_secret]):
            logger.warning(
                "Google OAuth client not configured. "
                "Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET."
            )
            return

        try:
            credentials = Credentials(
                token=None,
                refresh_token=settings.google_refresh_token,
                token_uri=TOKEN_URI,
                client_id=settings.google_client_id,
                client_secret=settings.google_client_secret,
                scopes=DRIVE_SCOPES,
            )
            self._service = build("drive", "v3", credentials=credentials, cache_discovery=False)
            self._configured = True
            logger.info("Google Drive client initialized")
        except Exception as e:
            logger.error(f"Failed to initialize Google Drive client: {e}")

    @property
    def is_configured(self) -> bool:
        """Check if the Drive client is properly configured."""
        return self._configured and self._service is not None

    def _require_service(self):
        if not self.is_configured:
            raise DriveNotConfiguredError()
        return self._service

    def _translate_error(self, operation: str, error: Exception, file_id: Optional[str] = None) -> DriveError:
        """Record a failed provider call and wrap it in a DriveError."""
        if isinstance(error, HttpError):
            status_code = error.resp.status
            reason = str(status_code)
        else:
            status_code = None
            reason = type(error).__name__

        drive_failures_total.labels(operation=operation, reason=reason).inc()
        log_provider_failure(logger, operation=operation, error=str(error), file_id=file_id)

        if file_id and status_code in NOT_FOUND_STATUSES:
            return DriveFileNotFoundError(file_id)
        return DriveError(f"Drive {operation} failed: {error}")

    def _record(self, operation: str, start_time: float, file_id: Optional[str] = None):
        duration = time.time() - start_time
        drive_requests_total.labels(operation=operation).inc()
        drive_request_duration_seconds.labels(operation=operation).observe(duration)
        log_provider_request(logger, operation=operation, duration_ms=duration * 1000, file_id=file_id)

    def upload_file(self, data: bytes, name: str, mime_type: str) -> UploadedFile:
        """
        Create a new Drive file from in-memory bytes.

        Args:
            data: File contents
            name: Display name in Drive
            mime_type: Declared MIME type of the contents

        Returns:
            UploadedFile with the provider-assigned id

        Raises:
            DriveError: If the provider rejects the upload
        """
        service = self._require_service()
        media = MediaIoBaseUpload(io.BytesIO(data), mimetype=mime_type, resumable=False)

        start_time = time.time()
        try:
            response = service.files().create(
                body={"name": name},
                media_body=media,
                fields="id",
            ).execute()
        except Exception as e:
            raise self._translate_error("upload", e) from e

        file_id = response["id"]
        self._record("upload", start_time, file_id=file_id)
        return UploadedFile(file_id=file_id, name=name, mime_type=mime_type)

    def make_public(self, file_id: str) -> None:
        """Grant read access to anyone holding the link."""
        service = self._require_service()

        start_time = time.time()
        try:
            service.permissions().create(
                fileId=file_id,
                body={"role": "reader", "type": "anyone"},
            ).execute()
        except Exception as e:
            raise self._translate_error("make_public", e, file_id=file_id) from e

        self._record("make_public", start_time, file_id=file_id)

    def get_metadata(self, file_id: str) -> FileMetadata:
        """
        Look up the name and MIME type of a file.

        Raises:
            DriveFileNotFoundError: Unknown id or no access
            DriveError: Any other provider failure
        """
        service = self._require_service()

        start_time = time.time()
        try:
            response = service.files().get(
                fileId=file_id,
                fields="mimeType, name",
            ).execute()
        except Exception as e:
            raise self._translate_error("get_metadata", e, file_id=file_id) from e

        self._record("get_metadata", start_time, file_id=file_id)
        return FileMetadata(
            file_id=file_id,
            name=response.get("name", file_id),
            mime_type=response.get("mimeType", "application/octet-stream"),
        )

    def iter_content(self, file_id: str, chunk_size: Optional[int] = None) -> Iterator[bytes]:
        """
        Yield the file's bytes chunk by chunk.

        Each chunk is one ranged media request, so memory use stays bounded
        by chunk_size regardless of the file size.
        """
        service = self._require_service()
        if chunk_size is None:
            chunk_size = settings.stream_chunk_size

        request = service.files().get_media(fileId=file_id)
        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(buffer, request, chunksize=chunk_size)

        start_time = time.time()
        done = False
        while not done:
            try:
                _, done = downloader.next_chunk()
            except Exception as e:
                raise self._translate_error("stream", e, file_id=file_id) from e

            chunk = buffer.getvalue()
            if chunk:
                yield chunk
            buffer.seek(0)
            buffer.truncate(0)

        self._record("stream", start_time, file_id=file_id)

    def delete_file(self, file_id: str) -> None:
        """
        Permanently delete a file (bypasses the Drive trash).

        Raises:
            DriveFileNotFoundError: Unknown id or no access
            DriveError: Any other provider failure
        """
        service = self._require_service()

        start_time = time.time()
        try:
            service.files().delete(fileId=file_id).execute()
        except Exception as e:
            raise self._translate_error("delete", e, file_id=file_id) from e

        self._record("delete", start_time, file_id=file_id)


# Singleton instance
_drive_client: Optional[DriveClient] = None


def get_drive_client() -> DriveClient:
    """
    Get the singleton Drive client instance.

    Also used as a FastAPI dependency so tests can override it.

    Returns:
        DriveClient instance (may or may not be configured)
    """
    global _drive_client
    if _drive_client is None:
        _drive_client = DriveClient()
    return _drive_client
