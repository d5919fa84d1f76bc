"""
User account service.

Users are keyed by email. First login creates the record, later logins
only touch ``last_login``; both paths go through a single
insert-if-absent statement on the unique email index so concurrent first
logins cannot produce duplicates.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.user import normalize_email
from core.errors import InvalidInputError, NotFoundError
from infrastructure.database.models import PaymentRecord, User, UserRole
from infrastructure.database.models.base import utcnow

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "bio", "photo_url")


@dataclass
class UpsertResult:
    user: User
    inserted: bool


class UserService:
    """Account lookups, login upsert and profile edits."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "sqlite":
            return sqlite_insert(User)
        return pg_insert(User)

    async def upsert_on_login(self, email: str, payload: Optional[dict[str, Any]] = None) -> UpsertResult:
        """Create the user on first login, otherwise record the login time."""
        if not email or not email.strip():
            raise InvalidInputError("Email is required")
        email = normalize_email(email)
        payload = payload or {}
        now = utcnow()

        stmt = (
            self._insert()
            .values(
                id=str(uuid4()),
                email=email,
                role=UserRole.USER.value,
                name=payload.get("name"),
                bio=payload.get("bio"),
                photo_url=payload.get("photo_url"),
                is_premium=False,
                created_at=now,
                updated_at=now,
                last_login=now,
            )
            .on_conflict_do_nothing(index_elements=["email"])
            .returning(User.id)
        )
        inserted_id = (await self.db.execute(stmt)).scalar_one_or_none()

        if inserted_id is not None:
            await self.db.commit()
            logger.info("Registered new user %s", email)
            return UpsertResult(user=await self._get_fresh(email), inserted=True)

        user = await self._get_fresh(email)
        user.last_login = now
        self.revoke_expired_premium(user)
        await self.db.commit()
        return UpsertResult(user=user, inserted=False)

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User))
        return list(result.scalars().all())

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()

    async def get_user(self, email: str) -> User:
        """Fetch a user, lapsing any expired premium grant on the way."""
        user = await self.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        if self.revoke_expired_premium(user):
            await self.db.commit()
        return user

    async def update_profile(self, email: str, fields: dict[str, Any]) -> User:
        """Apply only the provided profile fields and touch updated_at."""
        user = await self.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")

        for field in PROFILE_FIELDS:
            if field in fields:
                setattr(user, field, fields[field])
        user.updated_at = utcnow()

        await self.db.commit()
        return user

    async def delete_user(self, user_id: str) -> None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")

        await self.db.delete(user)
        await self.db.commit()
        logger.info("Deleted user %s (%s)", user_id, user.email)

    async def list_payments(self, email: str) -> list[PaymentRecord]:
        result = await self.db.execute(
            select(PaymentRecord)
            .where(PaymentRecord.email == normalize_email(email))
            .order_by(PaymentRecord.paid_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    def revoke_expired_premium(user: User) -> bool:
        """Clear the premium flag once its expiry has passed. Returns True if changed."""
        if not user.premium_expired:
            return False
        user.is_premium = False
        logger.info("Premium expired for %s", user.email)
        return True

    async def _get_fresh(self, email: str) -> User:
        result = await self.db.execute(
            select(User)
            .where(User.email == normalize_email(email))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
