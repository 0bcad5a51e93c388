# devfeed/adapters/inbound/api/v1/endpoints/comment_endpoint.py (async version)

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.inbound.api.deps import get_current_principal, get_session
from devfeed.application.dtos.article_dto import CommentCreate, CommentResponse
from devfeed.application.dtos.error_dto import ErrorResponse
from devfeed.application.use_cases.comment_use_cases import AsyncCommentService
from devfeed.domain.models.principal import Principal

router = APIRouter()


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment an article",
    responses={404: {"model": ErrorResponse, "description": "Article not found"}},
)
async def add_comment(
        request: CommentCreate,
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCommentService(db).add_comment(principal, request)


@router.get(
    "/article/{article_id}",
    response_model=List[CommentResponse],
    summary="Comments of an article, oldest first",
    responses={404: {"model": ErrorResponse, "description": "Article not found"}},
)
async def list_comments(
        article_id: int,
        _: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCommentService(db).list_for_article(article_id)


@router.get("/my-comments", response_model=List[CommentResponse], summary="Comments of the current user")
async def list_my_comments(
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCommentService(db).list_my_comments(principal)


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Comment by ID",
    responses={404: {"model": ErrorResponse, "description": "Comment not found"}},
)
async def get_comment(
        comment_id: int,
        _: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCommentService(db).get_comment(comment_id)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a comment (author only)",
    responses={
        403: {"model": ErrorResponse, "description": "Not the author of the comment"},
        404: {"model": ErrorResponse, "description": "Comment not found"},
    },
)
async def delete_comment(
        comment_id: int,
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    await AsyncCommentService(db).delete_comment(principal, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
