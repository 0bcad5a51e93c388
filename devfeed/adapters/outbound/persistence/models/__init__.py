# devfeed/adapters/outbound/persistence/models/__init__.py

"""
Data models.

Importing this package registers every table on Base.metadata.
"""

from devfeed.adapters.outbound.persistence.models.base_model import Base
from devfeed.adapters.outbound.persistence.models.user_model import User
from devfeed.adapters.outbound.persistence.models.theme_model import Theme
from devfeed.adapters.outbound.persistence.models.article_model import Article
from devfeed.adapters.outbound.persistence.models.comment_model import Comment
from devfeed.adapters.outbound.persistence.models.subscription_model import Subscription

__all__ = [
    "Base",
    "User",
    "Theme",
    "Article",
    "Comment",
    "Subscription",
]
