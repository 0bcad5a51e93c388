# devfeed/adapters/outbound/persistence/repositories/article_repository.py (async version)

"""
Repository for articles.

Listings are newest first. Author and theme are joined on every query since
each response carries their names.
"""

from typing import List, Optional
from sqlalchemy import delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from devfeed.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from devfeed.adapters.outbound.persistence.models import Article, Comment, Subscription
from devfeed.application.ports.outbound import IArticleRepository
from devfeed.domain.exceptions import ArticleNotFoundException, DatabaseOperationException


class AsyncArticleCRUD(AsyncCRUDBase[Article], IArticleRepository):
    not_found_exception = ArticleNotFoundException

    def _newest_first(self):
        return select(Article).order_by(Article.created_at.desc(), Article.id.desc())

    async def _fetch(self, db: AsyncSession, query, description: str) -> List[Article]:
        try:
            result = await db.execute(query)
            return list(result.unique().scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error {description}: {e}")
            raise DatabaseOperationException(detail=f"Error {description}", original_error=e)

    async def list_recent(
            self, db: AsyncSession, *, author_id: Optional[int] = None, theme_id: Optional[int] = None
    ) -> List[Article]:
        """
        List articles newest first.

        Args:
            db: Async database session
            author_id: Only articles written by this user
            theme_id: Only articles classified under this theme
        """
        query = self._newest_first()
        if author_id is not None:
            query = query.where(Article.author_id == author_id)
        if theme_id is not None:
            query = query.where(Article.theme_id == theme_id)
        return await self._fetch(db, query, "listing articles")

    async def search(self, db: AsyncSession, keyword: str) -> List[Article]:
        """Case-insensitive substring match on title or content."""
        pattern = f"%{keyword}%"
        query = self._newest_first().where(
            or_(Article.title.ilike(pattern), Article.content.ilike(pattern))
        )
        return await self._fetch(db, query, "searching articles")

    async def feed_for(self, db: AsyncSession, user_id: int) -> List[Article]:
        subscribed = select(Subscription.theme_id).where(Subscription.user_id == user_id)
        query = self._newest_first().where(Article.theme_id.in_(subscribed))
        return await self._fetch(db, query, "building feed")

    async def remove(self, db: AsyncSession, *, db_obj: Article) -> None:
        """Delete the article and its comments in one transaction."""
        try:
            await db.execute(delete(Comment).where(Comment.article_id == db_obj.id))
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error removing comments of article {db_obj.id}: {e}")
            raise DatabaseOperationException(detail="Error removing article", original_error=e)
        await super().remove(db, db_obj=db_obj)


article_repository = AsyncArticleCRUD(Article)
