"""
Security utilities for authentication and authorization.
"""

from .guards import (
    is_admin,
    is_owner,
    require_admin,
    require_owner,
    require_owner_or_admin,
    run_guards,
)
from .tokens import TokenPayload, TokenService

__all__ = [
    "TokenService",
    "TokenPayload",
    "is_admin",
    "is_owner",
    "require_admin",
    "require_owner",
    "require_owner_or_admin",
    "run_guards",
]
