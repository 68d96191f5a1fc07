"""
Pydantic schema for the liveness endpoint.
"""
from pydantic import BaseModel, Field
from datetime import datetime


class StatusResponse(BaseModel):
    """Schema for liveness response."""
    status: str = Field(..., description="Always 'online' when the process is serving")
    message: str
    timestamp: datetime
    env: str = Field(..., description="Value of ENVIRONMENT")
