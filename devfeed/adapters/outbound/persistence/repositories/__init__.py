# devfeed/adapters/outbound/persistence/repositories/__init__.py (async version)

"""
Repository module.

Exports the repository classes and their singleton instances.
"""

from devfeed.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from devfeed.adapters.outbound.persistence.repositories.user_repository import AsyncUserCRUD, user_repository
from devfeed.adapters.outbound.persistence.repositories.theme_repository import AsyncThemeCRUD, theme_repository
from devfeed.adapters.outbound.persistence.repositories.article_repository import (
    AsyncArticleCRUD,
    article_repository,
)
from devfeed.adapters.outbound.persistence.repositories.comment_repository import (
    AsyncCommentCRUD,
    comment_repository,
)
from devfeed.adapters.outbound.persistence.repositories.subscription_repository import (
    AsyncSubscriptionCRUD,
    subscription_repository,
)

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncUserCRUD",
    "AsyncThemeCRUD",
    "AsyncArticleCRUD",
    "AsyncCommentCRUD",
    "AsyncSubscriptionCRUD",

    # Instances
    "user_repository",
    "theme_repository",
    "article_repository",
    "comment_repository",
    "subscription_repository",
]
