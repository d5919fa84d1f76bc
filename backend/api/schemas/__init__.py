"""
API request and response schemas.
"""

from .articles import (
    ArticleCreateRequest,
    ArticleResponse,
    ArticleStatusRequest,
    ArticleUpdateRequest,
    AuthorStatsResponse,
)
from .auth import TokenRequest, TokenResponse
from .payments import PaymentIntentRequest, PaymentIntentResponse
from .publishers import PublisherCreateRequest, PublisherResponse, PublisherUpdateRequest
from .users import (
    PaymentRecordResponse,
    ProfileUpdateRequest,
    SubscribeRequest,
    SubscribeResponse,
    UserResponse,
    UserUpsertRequest,
    UserUpsertResponse,
)

__all__ = [
    "ArticleCreateRequest",
    "ArticleResponse",
    "ArticleStatusRequest",
    "ArticleUpdateRequest",
    "AuthorStatsResponse",
    "TokenRequest",
    "TokenResponse",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    "PublisherCreateRequest",
    "PublisherResponse",
    "PublisherUpdateRequest",
    "PaymentRecordResponse",
    "ProfileUpdateRequest",
    "SubscribeRequest",
    "SubscribeResponse",
    "UserResponse",
    "UserUpsertRequest",
    "UserUpsertResponse",
]
