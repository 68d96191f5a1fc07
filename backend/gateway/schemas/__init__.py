"""
Pydantic schemas for API responses.
"""
from gateway.schemas.status import StatusResponse
from gateway.schemas.image import (
    UploadResponse,
    DeleteResponse,
)

__all__ = [
    "StatusResponse",
    "UploadResponse",
    "DeleteResponse",
]
