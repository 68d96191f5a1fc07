"""
Pydantic schemas for image upload and delete endpoints.

Field names on the wire are camelCase to match the existing mobile client.
"""
from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Schema for upload response."""
    message: str = "Uploaded"
    file_id: str = Field(..., alias="fileId", description="Google Drive file ID")
    display_url: str = Field(..., alias="displayUrl", description="Proxy URL serving the image")

    class Config:
        populate_by_name = True  # Allow both alias and original name
        json_schema_extra = {
            "example": {
                "message": "Uploaded",
                "fileId": "1a2B3c4D5e6F7g8H9i0J",
                "displayUrl": "http://localhost:3000/image/1a2B3c4D5e6F7g8H9i0J"
            }
        }


class DeleteResponse(BaseModel):
    """Schema for delete response."""
    message: str = "File deleted successfully"
