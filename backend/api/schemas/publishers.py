"""
Publisher directory schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PublisherCreateRequest(BaseModel):
    """Both fields are required; emptiness is reported as invalid input."""

    name: Optional[str] = Field(None, max_length=255)
    image: Optional[str] = Field(None, max_length=1000)


class PublisherUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    image: Optional[str] = Field(None, max_length=1000)


class PublisherResponse(BaseModel):
    id: str
    name: str
    image: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
