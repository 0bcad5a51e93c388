# devfeed/adapters/outbound/persistence/repositories/comment_repository.py (async version)

from typing import Dict, Iterable, List
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from devfeed.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from devfeed.adapters.outbound.persistence.models import Comment
from devfeed.domain.exceptions import CommentNotFoundException, DatabaseOperationException


class AsyncCommentCRUD(AsyncCRUDBase[Comment]):
    not_found_exception = CommentNotFoundException

    async def _list(self, db: AsyncSession, condition, description: str) -> List[Comment]:
        try:
            query = select(Comment).where(condition).order_by(Comment.created_at.asc(), Comment.id.asc())
            result = await db.execute(query)
            return list(result.unique().scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing comments of {description}: {e}")
            raise DatabaseOperationException(detail="Error listing comments", original_error=e)

    async def list_for_article(self, db: AsyncSession, article_id: int) -> List[Comment]:
        """Comments of an article, oldest first."""
        return await self._list(db, Comment.article_id == article_id, f"article {article_id}")

    async def list_for_author(self, db: AsyncSession, author_id: int) -> List[Comment]:
        """Comments written by a user, oldest first."""
        return await self._list(db, Comment.author_id == author_id, f"user {author_id}")

    async def count_by_article(self, db: AsyncSession, article_ids: Iterable[int]) -> Dict[int, int]:
        """
        Number of comments per article.

        Articles without comments are absent from the result.
        """
        article_ids = list(article_ids)
        if not article_ids:
            return {}
        try:
            query = (
                select(Comment.article_id, func.count(Comment.id))
                .where(Comment.article_id.in_(article_ids))
                .group_by(Comment.article_id)
            )
            result = await db.execute(query)
            return {article_id: count for article_id, count in result.all()}
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting comments: {e}")
            raise DatabaseOperationException(detail="Error counting comments", original_error=e)


comment_repository = AsyncCommentCRUD(Comment)
