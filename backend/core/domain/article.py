"""Article workflow domain objects."""

from dataclasses import asdict, dataclass

# Statuses an editor may move an article into
REVIEW_STATUSES = frozenset({"approved", "rejected"})

# Every status an article may hold
ARTICLE_STATUSES = frozenset({"pending"}) | REVIEW_STATUSES


@dataclass(frozen=True)
class AuthorStats:
    """Aggregate counts over one author's articles."""

    total: int = 0
    approved: int = 0
    pending: int = 0
    rejected: int = 0
    total_views: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)
