"""
Provider-neutral records for files held in Drive.
"""
from pydantic import BaseModel


class UploadedFile(BaseModel):
    """A file created by an upload. Not retained locally."""

    file_id: str
    name: str
    mime_type: str


class FileMetadata(BaseModel):
    """Metadata looked up before proxying a file's bytes."""

    file_id: str
    name: str
    mime_type: str
