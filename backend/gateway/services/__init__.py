"""
Business logic services.
"""
from gateway.services.upload_service import UploadService

__all__ = [
    "UploadService",
]
