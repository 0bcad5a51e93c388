# devfeed/adapters/outbound/persistence/repositories/theme_repository.py (async version)

from typing import List, Optional
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from devfeed.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from devfeed.adapters.outbound.persistence.models import Article, Subscription, Theme
from devfeed.domain.exceptions import (
    DatabaseOperationException,
    ThemeAlreadyExistsException,
    ThemeNotFoundException,
)


class AsyncThemeCRUD(AsyncCRUDBase[Theme]):
    conflict_exception = ThemeAlreadyExistsException
    not_found_exception = ThemeNotFoundException

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Theme]:
        return await self.get_by_field(db, "name", name)

    async def list_all(self, db: AsyncSession) -> List[Theme]:
        """Every theme, alphabetically."""
        try:
            result = await db.execute(select(Theme).order_by(Theme.name))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing themes: {e}")
            raise DatabaseOperationException(detail="Error listing themes", original_error=e)

    async def has_articles(self, db: AsyncSession, theme_id: int) -> bool:
        try:
            query = select(Article.id).where(Article.theme_id == theme_id).limit(1)
            result = await db.execute(query)
            return result.first() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking articles of theme {theme_id}: {e}")
            raise DatabaseOperationException(detail="Error checking theme articles", original_error=e)

    async def remove(self, db: AsyncSession, *, db_obj: Theme) -> None:
        """Delete the theme and every subscription to it in one transaction."""
        try:
            await db.execute(delete(Subscription).where(Subscription.theme_id == db_obj.id))
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error removing subscriptions to theme {db_obj.id}: {e}")
            raise DatabaseOperationException(detail="Error removing theme", original_error=e)
        await super().remove(db, db_obj=db_obj)


theme_repository = AsyncThemeCRUD(Theme)
