# devfeed/adapters/outbound/persistence/repositories/subscription_repository.py (async version)

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from devfeed.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from devfeed.adapters.outbound.persistence.models import Subscription
from devfeed.application.ports.outbound import ISubscriptionRepository
from devfeed.domain.exceptions import DatabaseOperationException


class AsyncSubscriptionCRUD(AsyncCRUDBase[Subscription], ISubscriptionRepository):

    async def get_for(self, db: AsyncSession, user_id: int, theme_id: int) -> Optional[Subscription]:
        try:
            query = select(Subscription).where(
                Subscription.user_id == user_id,
                Subscription.theme_id == theme_id,
            )
            result = await db.execute(query)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching subscription of user {user_id} to theme {theme_id}: {e}")
            raise DatabaseOperationException(detail="Error fetching subscription", original_error=e)

    async def theme_ids_for_user(self, db: AsyncSession, user_id: int) -> List[int]:
        try:
            query = (
                select(Subscription.theme_id)
                .where(Subscription.user_id == user_id)
                .order_by(Subscription.created_at.asc(), Subscription.id.asc())
            )
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing subscriptions of user {user_id}: {e}")
            raise DatabaseOperationException(detail="Error listing subscriptions", original_error=e)


subscription_repository = AsyncSubscriptionCRUD(Subscription)
