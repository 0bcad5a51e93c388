# devfeed/application/use_cases/__init__.py (async version)

"""
Application service module.

This package contains the application services that implement the business logic
of the application, organized according to functional domains.
"""

from devfeed.application.use_cases.auth_use_cases import AsyncAuthService
from devfeed.application.use_cases.theme_use_cases import AsyncThemeService
from devfeed.application.use_cases.article_use_cases import AsyncArticleService
from devfeed.application.use_cases.comment_use_cases import AsyncCommentService
from devfeed.application.use_cases.subscription_use_cases import AsyncSubscriptionService

__all__ = [
    "AsyncAuthService",
    "AsyncThemeService",
    "AsyncArticleService",
    "AsyncCommentService",
    "AsyncSubscriptionService",
]
