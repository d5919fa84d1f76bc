"""
Article API routes.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_token_email
from api.schemas.articles import (
    ArticleCreateRequest,
    ArticleResponse,
    ArticleStatusRequest,
    ArticleUpdateRequest,
    AuthorStatsResponse,
)
from core.domain.user import normalize_email
from core.security.guards import require_owner
from infrastructure.database.connection import get_db
from services.article_workflow import ArticleWorkflow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/article", tags=["articles"])


@router.get("", response_model=list[ArticleResponse])
async def list_pending_articles(db: AsyncSession = Depends(get_db)):
    """
    List articles awaiting editorial review.
    """
    return await ArticleWorkflow(db).list_pending()


@router.get("/approved", response_model=list[ArticleResponse])
async def list_approved_articles(db: AsyncSession = Depends(get_db)):
    """
    List published (approved) articles.
    """
    return await ArticleWorkflow(db).list_approved()


@router.get("/my-article", response_model=list[ArticleResponse])
async def list_my_articles(
    email: str = Query(..., min_length=1),
    caller_email: str = Depends(get_token_email),
    db: AsyncSession = Depends(get_db),
):
    """
    List the caller's own articles. The queried email must match the token.
    """
    require_owner(caller_email, email)
    return await ArticleWorkflow(db).list_by_author(email)


@router.get("/user-stats/{email}", response_model=AuthorStatsResponse)
async def get_author_stats(
    email: str,
    caller_email: str = Depends(get_token_email),
    db: AsyncSession = Depends(get_db),
):
    """
    Article counts by status plus total views for the caller.
    """
    require_owner(caller_email, email)
    stats = await ArticleWorkflow(db).compute_author_stats(email)
    return AuthorStatsResponse(email=normalize_email(email), **stats.to_dict())


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def submit_article(
    request: ArticleCreateRequest,
    caller_email: str = Depends(get_token_email),
    db: AsyncSession = Depends(get_db),
):
    """
    Submit an article. It is queued as pending unless a status is given.
    """
    return await ArticleWorkflow(db).submit(request.to_payload(), caller_email)


@router.patch("/status/{article_id}", response_model=ArticleResponse)
async def change_article_status(
    article_id: str,
    request: ArticleStatusRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Approve or reject an article. Re-applying a decision always succeeds.
    """
    return await ArticleWorkflow(db).transition(article_id, request.status, request.reason)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: str, db: AsyncSession = Depends(get_db)):
    """
    Get a specific article by ID and count the view.
    """
    return await ArticleWorkflow(db).get(article_id)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    request: ArticleUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Edit article content.
    """
    return await ArticleWorkflow(db).update_content(article_id, request.to_payload())


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    caller_email: str = Depends(get_token_email),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete an article. Only its author or an admin may do so.
    """
    await ArticleWorkflow(db).delete(article_id, caller_email)
