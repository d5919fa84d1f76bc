"""
Publisher directory routes. Reads are public; writes need an admin token.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_admin_email
from api.schemas.publishers import (
    PublisherCreateRequest,
    PublisherResponse,
    PublisherUpdateRequest,
)
from infrastructure.database.connection import get_db
from services.publishers import PublisherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/publishers", tags=["publishers"])


@router.post("", response_model=PublisherResponse, status_code=status.HTTP_201_CREATED)
async def create_publisher(
    request: PublisherCreateRequest,
    admin_email: str = Depends(get_current_admin_email),
    db: AsyncSession = Depends(get_db),
):
    """Add a publisher. Name and image are required."""
    return await PublisherService(db).create(request.name, request.image)


@router.get("", response_model=list[PublisherResponse])
async def list_publishers(db: AsyncSession = Depends(get_db)):
    return await PublisherService(db).list_all()


@router.get("/{publisher_id}", response_model=PublisherResponse)
async def get_publisher(publisher_id: str, db: AsyncSession = Depends(get_db)):
    return await PublisherService(db).get(publisher_id)


@router.patch("/{publisher_id}", response_model=PublisherResponse)
async def update_publisher(
    publisher_id: str,
    request: PublisherUpdateRequest,
    admin_email: str = Depends(get_current_admin_email),
    db: AsyncSession = Depends(get_db),
):
    """Rename a publisher or replace its image."""
    return await PublisherService(db).update(publisher_id, request.model_dump(exclude_unset=True))


@router.delete("/{publisher_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_publisher(
    publisher_id: str,
    admin_email: str = Depends(get_current_admin_email),
    db: AsyncSession = Depends(get_db),
):
    await PublisherService(db).delete(publisher_id)
    logger.info("Publisher %s deleted by admin %s", publisher_id, admin_email)
