"""
Article database model.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class ArticleStatus(str, Enum):
    """Editorial status of a submitted article."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Article(Base, TimestampMixin):
    """Submitted news article."""

    __tablename__ = "articles"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Author (by email reference, not a foreign key)
    author_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    author_photo: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    # Content
    title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    publisher: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tags: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Any other submitted fields, stored verbatim
    extra: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    # Workflow
    status: Mapped[str] = mapped_column(
        String(20),
        default=ArticleStatus.PENDING.value,
        nullable=False,
    )
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (
        Index("ix_articles_status", "status"),
        Index("ix_articles_author_status", "author_email", "status"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, author={self.author_email}, status={self.status})>"
