# devfeed/application/use_cases/article_use_cases.py (async version)

"""
Service for articles.

Anyone authenticated can read and publish. Only the author of an article can
replace or delete it.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.outbound.persistence.repositories.article_repository import article_repository
from devfeed.adapters.outbound.persistence.repositories.comment_repository import comment_repository
from devfeed.adapters.outbound.persistence.repositories.theme_repository import theme_repository
from devfeed.adapters.outbound.security.permissions import ensure_may_modify
from devfeed.application.dtos.article_dto import ArticleCreate, ArticleResponse
from devfeed.domain.models.principal import Principal

logger = logging.getLogger(__name__)


async def with_comment_counts(db: AsyncSession, articles) -> List[ArticleResponse]:
    """Build article responses, counting the comments of all articles in one query."""
    counts = await comment_repository.count_by_article(db, (article.id for article in articles))
    return [ArticleResponse.from_model(article, counts.get(article.id, 0)) for article in articles]


class AsyncArticleService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def create_article(self, principal: Principal, request: ArticleCreate) -> ArticleResponse:
        """
        Publish an article as ``principal``.

        Raises:
            ThemeNotFoundException: If the theme does not exist
        """
        await theme_repository.get_or_raise(self.db, request.theme_id)

        article = await article_repository.create(
            self.db,
            obj_in={
                "title": request.title,
                "content": request.content,
                "theme_id": request.theme_id,
                "author_id": principal.id,
            },
        )
        logger.info(f"Article {article.id} created by user {principal.id}")
        return ArticleResponse.from_model(article)

    async def list_articles(self) -> List[ArticleResponse]:
        return await self._responses(await article_repository.list_recent(self.db))

    async def get_article(self, article_id: int) -> ArticleResponse:
        article = await article_repository.get_or_raise(self.db, article_id)
        return await self._response(article)

    async def list_my_articles(self, principal: Principal) -> List[ArticleResponse]:
        return await self._responses(await article_repository.list_recent(self.db, author_id=principal.id))

    async def list_by_theme(self, theme_id: int) -> List[ArticleResponse]:
        await theme_repository.get_or_raise(self.db, theme_id)
        return await self._responses(await article_repository.list_recent(self.db, theme_id=theme_id))

    async def search(self, keyword: str) -> List[ArticleResponse]:
        keyword = keyword.strip()
        if not keyword:
            return []
        return await self._responses(await article_repository.search(self.db, keyword))

    async def update_article(
            self, principal: Principal, article_id: int, request: ArticleCreate
    ) -> ArticleResponse:
        """
        Replace title, content and theme of an article.

        Raises:
            ArticleNotFoundException: If the article does not exist
            UnauthorizedOperationException: If ``principal`` is not the author
            ThemeNotFoundException: If the new theme does not exist
        """
        article = await article_repository.get_or_raise(self.db, article_id)
        ensure_may_modify(principal, article, "update")
        await theme_repository.get_or_raise(self.db, request.theme_id)

        article = await article_repository.update(
            self.db,
            db_obj=article,
            obj_in={
                "title": request.title,
                "content": request.content,
                "theme_id": request.theme_id,
            },
        )
        return await self._response(article)

    async def delete_article(self, principal: Principal, article_id: int) -> None:
        """
        Delete an article and its comments.

        Raises:
            ArticleNotFoundException: If the article does not exist
            UnauthorizedOperationException: If ``principal`` is not the author
        """
        article = await article_repository.get_or_raise(self.db, article_id)
        ensure_may_modify(principal, article, "delete")
        await article_repository.remove(self.db, db_obj=article)

    async def _response(self, article) -> ArticleResponse:
        (response,) = await with_comment_counts(self.db, [article])
        return response

    async def _responses(self, articles) -> List[ArticleResponse]:
        return await with_comment_counts(self.db, articles)
