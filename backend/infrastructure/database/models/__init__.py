"""
SQLAlchemy database models.
"""

from .article import Article, ArticleStatus
from .base import Base, TimestampMixin
from .payment import PaymentRecord
from .publisher import Publisher
from .user import User, UserRole

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "UserRole",
    "Article",
    "ArticleStatus",
    "Publisher",
    "PaymentRecord",
]
