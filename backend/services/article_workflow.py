"""
Article workflow service.

Submission lands articles in the ``pending`` state; editors move them to
``approved`` or ``rejected``. Transitions are unconditional overwrites with
no prior-state check, so corrections can always be re-applied.
"""

import logging
from typing import Any, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.article import ARTICLE_STATUSES, REVIEW_STATUSES, AuthorStats
from core.domain.user import normalize_email
from core.errors import InvalidInputError, NotFoundError
from core.security.guards import require_owner_or_admin
from infrastructure.database.models import Article, ArticleStatus, User
from infrastructure.database.models.base import utcnow

logger = logging.getLogger(__name__)

# Columns a submitter or editor may write directly
CONTENT_FIELDS = frozenset(
    {"title", "description", "image", "publisher", "tags", "is_premium", "author_name", "author_photo"}
)

# Managed by the workflow itself; silently ignored in payloads
RESERVED_FIELDS = frozenset(
    {
        "id",
        "status",
        "author_email",
        "views",
        "rejection_reason",
        "reviewed_at",
        "created_at",
        "updated_at",
        "extra",
    }
)


def _split_payload(payload: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate known content columns from free-form extra fields."""
    columns: dict[str, Any] = {}
    supplied = payload.get("extra")
    if isinstance(supplied, dict):
        extra: dict[str, Any] = dict(supplied)
    elif supplied is None:
        extra = {}
    else:
        # Not a mapping; kept verbatim like any other free-form field
        extra = {"extra": supplied}
    for key, value in payload.items():
        if key in CONTENT_FIELDS:
            columns[key] = value
        elif key not in RESERVED_FIELDS:
            extra[key] = value
    return columns, extra


class ArticleWorkflow:
    """Submission, editorial transitions and per-author statistics."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, payload: dict[str, Any], caller_email: str) -> Article:
        """Persist a new article authored by the caller, pending unless told otherwise."""
        status = payload.get("status") or ArticleStatus.PENDING.value
        if status not in ARTICLE_STATUSES:
            raise InvalidInputError(
                f"Invalid status. Must be one of: {', '.join(sorted(ARTICLE_STATUSES))}"
            )

        columns, extra = _split_payload(payload)
        if columns.get("is_premium") is None:
            columns.pop("is_premium", None)
        article = Article(
            author_email=normalize_email(caller_email),
            status=status,
            views=0,
            extra=extra or None,
            **columns,
        )
        self.db.add(article)
        await self.db.commit()

        logger.info("Article %s submitted by %s with status %s", article.id, caller_email, status)
        return article

    async def transition(
        self,
        article_id: str,
        new_status: str,
        reason: Optional[str] = None,
    ) -> Article:
        """Overwrite an article's editorial status."""
        if new_status not in REVIEW_STATUSES:
            raise InvalidInputError(
                f"Invalid status. Must be one of: {', '.join(sorted(REVIEW_STATUSES))}"
            )

        article = await self._get_or_404(article_id)
        article.status = new_status
        if new_status == ArticleStatus.REJECTED.value:
            article.rejection_reason = reason or None
        else:
            article.rejection_reason = None
        article.reviewed_at = utcnow()
        await self.db.commit()

        logger.info("Article %s moved to %s", article_id, new_status)
        return article

    async def compute_author_stats(self, email: str) -> AuthorStats:
        """Aggregate status counts and total views over one author's articles."""
        result = await self.db.execute(
            select(
                func.count().label("total"),
                func.count(case((Article.status == ArticleStatus.APPROVED.value, 1))).label("approved"),
                func.count(case((Article.status == ArticleStatus.PENDING.value, 1))).label("pending"),
                func.count(case((Article.status == ArticleStatus.REJECTED.value, 1))).label("rejected"),
                func.coalesce(func.sum(func.coalesce(Article.views, 0)), 0).label("total_views"),
            ).where(Article.author_email == normalize_email(email))
        )
        row = result.one()
        return AuthorStats(
            total=row.total or 0,
            approved=row.approved or 0,
            pending=row.pending or 0,
            rejected=row.rejected or 0,
            total_views=int(row.total_views or 0),
        )

    async def list_by_status(self, status: str) -> list[Article]:
        result = await self.db.execute(select(Article).where(Article.status == status))
        return list(result.scalars().all())

    async def list_pending(self) -> list[Article]:
        return await self.list_by_status(ArticleStatus.PENDING.value)

    async def list_approved(self) -> list[Article]:
        return await self.list_by_status(ArticleStatus.APPROVED.value)

    async def list_by_author(self, email: str) -> list[Article]:
        result = await self.db.execute(
            select(Article).where(Article.author_email == normalize_email(email))
        )
        return list(result.scalars().all())

    async def get(self, article_id: str, count_view: bool = True) -> Article:
        """Fetch one article, bumping its view counter in the same statement."""
        if count_view:
            result = await self.db.execute(
                update(Article)
                .where(Article.id == article_id)
                .values(views=Article.views + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("Article not found")
            await self.db.commit()

        result = await self.db.execute(
            select(Article)
            .where(Article.id == article_id)
            .execution_options(populate_existing=True)
        )
        article = result.scalar_one_or_none()
        if article is None:
            raise NotFoundError("Article not found")
        return article

    async def update_content(self, article_id: str, fields: dict[str, Any]) -> Article:
        """Apply content edits. Workflow and authorship fields are left alone."""
        article = await self._get_or_404(article_id)

        columns, extra = _split_payload(fields)
        for field, value in columns.items():
            if field == "is_premium" and value is None:
                continue
            setattr(article, field, value)
        if extra:
            # New dict so the JSON column registers the change
            article.extra = {**(article.extra or {}), **extra}

        await self.db.commit()
        return article

    async def delete(self, article_id: str, caller_email: str) -> None:
        """Remove an article on behalf of its author or an admin."""
        article = await self._get_or_404(article_id)

        caller = await self._get_user(caller_email)
        require_owner_or_admin(caller_email, article.author_email, caller)

        await self.db.delete(article)
        await self.db.commit()
        logger.info("Article %s deleted by %s", article_id, caller_email)

    async def _get_or_404(self, article_id: str) -> Article:
        result = await self.db.execute(select(Article).where(Article.id == article_id))
        article = result.scalar_one_or_none()
        if article is None:
            raise NotFoundError("Article not found")
        return article

    async def _get_user(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()
