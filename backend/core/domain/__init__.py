# Domain Entities
# Pure business objects with no external dependencies
from .article import ARTICLE_STATUSES, REVIEW_STATUSES, AuthorStats
from .user import MAX_DURATION_MINUTES, normalize_email

__all__ = [
    "ARTICLE_STATUSES",
    "REVIEW_STATUSES",
    "AuthorStats",
    "MAX_DURATION_MINUTES",
    "normalize_email",
]
