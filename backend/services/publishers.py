"""
Publisher directory service.
"""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import InvalidInputError, NotFoundError
from infrastructure.database.models import Publisher

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "image")


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInputError(f"{field.capitalize()} is required")
    return str(value).strip()


class PublisherService:
    """CRUD over publishers. Callers enforce the admin guard for writes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: Optional[str], image: Optional[str]) -> Publisher:
        if not name or not image:
            raise InvalidInputError("Name and image are required")
        publisher = Publisher(
            name=_require_text(name, "name"),
            image=_require_text(image, "image"),
        )
        self.db.add(publisher)
        await self.db.commit()

        logger.info("Created publisher %s (%s)", publisher.id, publisher.name)
        return publisher

    async def list_all(self) -> list[Publisher]:
        result = await self.db.execute(select(Publisher))
        return list(result.scalars().all())

    async def get(self, publisher_id: str) -> Publisher:
        result = await self.db.execute(select(Publisher).where(Publisher.id == publisher_id))
        publisher = result.scalar_one_or_none()
        if publisher is None:
            raise NotFoundError("Publisher not found")
        return publisher

    async def update(self, publisher_id: str, fields: dict[str, Any]) -> Publisher:
        publisher = await self.get(publisher_id)
        for field in EDITABLE_FIELDS:
            if field in fields:
                setattr(publisher, field, _require_text(fields[field], field))
        await self.db.commit()
        return publisher

    async def delete(self, publisher_id: str) -> None:
        publisher = await self.get(publisher_id)
        await self.db.delete(publisher)
        await self.db.commit()
        logger.info("Deleted publisher %s", publisher_id)
