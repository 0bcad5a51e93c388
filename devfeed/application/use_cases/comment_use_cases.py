# devfeed/application/use_cases/comment_use_cases.py (async version)

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.outbound.persistence.repositories.article_repository import article_repository
from devfeed.adapters.outbound.persistence.repositories.comment_repository import comment_repository
from devfeed.adapters.outbound.security.permissions import ensure_may_modify
from devfeed.application.dtos.article_dto import CommentCreate, CommentResponse
from devfeed.domain.models.principal import Principal

logger = logging.getLogger(__name__)


class AsyncCommentService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def add_comment(self, principal: Principal, request: CommentCreate) -> CommentResponse:
        await article_repository.get_or_raise(self.db, request.article_id)

        comment = await comment_repository.create(
            self.db,
            obj_in={
                "content": request.content,
                "article_id": request.article_id,
                "author_id": principal.id,
            },
        )
        logger.info(f"Comment {comment.id} added to article {request.article_id}")
        return CommentResponse.from_model(comment)

    async def list_for_article(self, article_id: int) -> List[CommentResponse]:
        await article_repository.get_or_raise(self.db, article_id)
        comments = await comment_repository.list_for_article(self.db, article_id)
        return [CommentResponse.from_model(comment) for comment in comments]

    async def get_comment(self, comment_id: int) -> CommentResponse:
        comment = await comment_repository.get_or_raise(self.db, comment_id)
        return CommentResponse.from_model(comment)

    async def list_my_comments(self, principal: Principal) -> List[CommentResponse]:
        comments = await comment_repository.list_for_author(self.db, principal.id)
        return [CommentResponse.from_model(comment) for comment in comments]

    async def delete_comment(self, principal: Principal, comment_id: int) -> None:
        """Only the comment's author may delete it."""
        comment = await comment_repository.get_or_raise(self.db, comment_id)
        ensure_may_modify(principal, comment, "delete")
        await comment_repository.remove(self.db, db_obj=comment)
