"""Liveness and dependency status endpoints."""

import asyncio
import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.config import get_settings
from infrastructure.database.connection import get_db

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

DB_CHECK_TIMEOUT = 5.0


def _status(healthy: bool, **details: Any) -> dict[str, Any]:
    return {
        "status": "healthy" if healthy else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        **details,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health")
async def health_check():
    """Process is up. Also reports whether card payments can be taken."""
    return _status(
        True,
        payments="configured" if settings.stripe_secret_key else "not_configured",
        verify_payment_intents=settings.verify_payment_intents,
    )


@router.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """Round-trip a trivial query; a slow or failing database reports degraded."""
    try:
        await asyncio.wait_for(db.execute(text("SELECT 1")), timeout=DB_CHECK_TIMEOUT)
    except TimeoutError:
        logger.error("Database health check timed out after %.0fs", DB_CHECK_TIMEOUT)
        return _status(False, database="timeout")
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)
        return _status(False, database="unavailable")

    return _status(True, database="connected")
