"""
Test configuration and fixtures.
Google Drive is replaced by an in-memory fake injected through dependency overrides.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ["PORT"] = "3000"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["GOOGLE_REDIRECT_URI"] = "http://localhost:3000/auth/google/callback"
os.environ.pop("GOOGLE_REFRESH_TOKEN", None)

import uuid as uuid_module
import pytest
from typing import AsyncGenerator, Dict, Iterator, Optional

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from gateway.storage.errors import DriveError, DriveFileNotFoundError
from gateway.storage.models import FileMetadata, UploadedFile


class FakeDriveClient:
    """In-memory stand-in for DriveClient."""

    def __init__(self):
        self.files: Dict[str, dict] = {}
        self.public_ids = set()
        self.fail_uploads = False
        self.fail_metadata = False
        self.fail_deletes = False
        # Raised on the first media request, as Drive does when get_media is refused
        self.stream_error: Optional[Exception] = None

    @property
    def is_configured(self) -> bool:
        return True

    def add_file(self, data: bytes, name: str = "photo.png", mime_type: str = "image/png") -> str:
        file_id = uuid_module.uuid4().hex
        self.files[file_id] = {"name": name, "mime_type": mime_type, "data": data}
        return file_id

    def upload_file(self, data: bytes, name: str, mime_type: str) -> UploadedFile:
        if self.fail_uploads:
            raise DriveError("Drive upload failed: quota exceeded")
        file_id = self.add_file(data, name=name, mime_type=mime_type)
        return UploadedFile(file_id=file_id, name=name, mime_type=mime_type)

    def make_public(self, file_id: str) -> None:
        if file_id not in self.files:
            raise DriveFileNotFoundError(file_id)
        self.public_ids.add(file_id)

    def get_metadata(self, file_id: str) -> FileMetadata:
        if self.fail_metadata:
            raise DriveError("Drive get_metadata failed: backend error")
        if file_id not in self.files:
            raise DriveFileNotFoundError(file_id)
        stored = self.files[file_id]
        return FileMetadata(file_id=file_id, name=stored["name"], mime_type=stored["mime_type"])

    def iter_content(self, file_id: str, chunk_size: Optional[int] = None) -> Iterator[bytes]:
        if self.stream_error is not None:
            raise self.stream_error
        if file_id not in self.files:
            raise DriveFileNotFoundError(file_id)
        data = self.files[file_id]["data"]
        size = chunk_size or 4
        for i in range(0, len(data), size):
            yield data[i:i + size]

    def delete_file(self, file_id: str) -> None:
        if self.fail_deletes:
            raise DriveError("Drive delete failed: backend error")
        if file_id not in self.files:
            raise DriveFileNotFoundError(file_id)
        del self.files[file_id]
        self.public_ids.discard(file_id)


@pytest.fixture
def fake_drive() -> FakeDriveClient:
    """Empty fake Drive."""
    return FakeDriveClient()


@pytest.fixture
def png_bytes() -> bytes:
    """Small payload with a PNG signature."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def get_test_app(fake_drive: FakeDriveClient) -> FastAPI:
    """Create a test FastAPI app with overridden dependencies."""
    from gateway.main import app
    from gateway.storage.drive_client import get_drive_client

    app.dependency_overrides[get_drive_client] = lambda: fake_drive

    return app


@pytest.fixture
async def client(fake_drive: FakeDriveClient) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = get_test_app(fake_drive)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()
