"""
Storage module for the Google Drive provider.

Uploaded images live entirely in the operator's Drive. This service only
holds a single long-lived API client and forwards calls to it.
"""
from gateway.storage.drive_client import get_drive_client, DriveClient
from gateway.storage.errors import DriveError, DriveFileNotFoundError, DriveNotConfiguredError
from gateway.storage.models import FileMetadata, UploadedFile

__all__ = [
    "get_drive_client",
    "DriveClient",
    "DriveError",
    "DriveFileNotFoundError",
    "DriveNotConfiguredError",
    "FileMetadata",
    "UploadedFile",
]
