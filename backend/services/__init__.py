"""
Service layer for business logic.
"""

from services.article_workflow import ArticleWorkflow
from services.payments import create_intent, to_minor_units
from services.publishers import PublisherService
from services.subscriptions import SubscriptionService
from services.users import UpsertResult, UserService

__all__ = [
    "ArticleWorkflow",
    "PublisherService",
    "SubscriptionService",
    "UserService",
    "UpsertResult",
    "create_intent",
    "to_minor_units",
]
