"""
Article API schemas.

Create and update payloads accept arbitrary additional fields; anything
that is not a known column is stored verbatim under ``extra``.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ArticleCreateRequest(BaseModel):
    """Article submission."""

    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=1000)
    publisher: Optional[str] = Field(None, max_length=255)
    tags: Optional[list[Any]] = None
    is_premium: Optional[bool] = None
    author_name: Optional[str] = Field(None, max_length=255)
    author_photo: Optional[str] = Field(None, max_length=1000)
    status: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    def to_payload(self) -> dict[str, Any]:
        """Provided fields plus any extra ones."""
        return {**self.model_dump(exclude_unset=True), **(self.model_extra or {})}


class ArticleUpdateRequest(BaseModel):
    """Content edit. Status and authorship cannot be changed here."""

    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=1000)
    publisher: Optional[str] = Field(None, max_length=255)
    tags: Optional[list[Any]] = None
    is_premium: Optional[bool] = None

    model_config = ConfigDict(extra="allow")

    def to_payload(self) -> dict[str, Any]:
        return {**self.model_dump(exclude_unset=True), **(self.model_extra or {})}


class ArticleStatusRequest(BaseModel):
    """Editorial status change."""

    status: str
    reason: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("reason", "rejection_reason"),
    )


class ArticleResponse(BaseModel):
    """Article response."""

    id: str
    author_email: str
    author_name: Optional[str] = None
    author_photo: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    publisher: Optional[str] = None
    tags: Optional[list[Any]] = None
    is_premium: bool = False
    extra: Optional[dict[str, Any]] = None
    status: str
    rejection_reason: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    views: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthorStatsResponse(BaseModel):
    """Per-author article counts."""

    email: str
    total: int
    approved: int
    pending: int
    rejected: int
    total_views: int
