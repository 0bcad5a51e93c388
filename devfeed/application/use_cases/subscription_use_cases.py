# devfeed/application/use_cases/subscription_use_cases.py (async version)

"""
Service for theme subscriptions and the personal feed.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.outbound.persistence.repositories.article_repository import article_repository
from devfeed.adapters.outbound.persistence.repositories.subscription_repository import (
    subscription_repository,
)
from devfeed.adapters.outbound.persistence.repositories.theme_repository import theme_repository
from devfeed.application.dtos.article_dto import ArticleResponse
from devfeed.application.use_cases.article_use_cases import with_comment_counts
from devfeed.domain.models.principal import Principal

logger = logging.getLogger(__name__)


class AsyncSubscriptionService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def subscribe(self, principal: Principal, theme_id: int) -> None:
        """
        Subscribe to a theme. Subscribing to a theme already followed changes nothing.

        Raises:
            ThemeNotFoundException: If the theme does not exist
        """
        await theme_repository.get_or_raise(self.db, theme_id)

        if await subscription_repository.get_for(self.db, principal.id, theme_id) is None:
            await subscription_repository.create(
                self.db,
                obj_in={"user_id": principal.id, "theme_id": theme_id},
            )
            logger.info(f"User {principal.id} subscribed to theme {theme_id}")

    async def unsubscribe(self, principal: Principal, theme_id: int) -> None:
        """Unsubscribing from a theme one does not follow is a no-op."""
        await theme_repository.get_or_raise(self.db, theme_id)

        subscription = await subscription_repository.get_for(self.db, principal.id, theme_id)
        if subscription is not None:
            await subscription_repository.remove(self.db, db_obj=subscription)
            logger.info(f"User {principal.id} unsubscribed from theme {theme_id}")

    async def list_subscriptions(self, principal: Principal) -> List[int]:
        """IDs of the themes followed by ``principal``, in subscription order."""
        return await subscription_repository.theme_ids_for_user(self.db, principal.id)

    async def feed(self, principal: Principal) -> List[ArticleResponse]:
        articles = await article_repository.feed_for(self.db, principal.id)
        return await with_comment_counts(self.db, articles)
