# devfeed/adapters/inbound/api/v1/endpoints/article_endpoint.py (async version)

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.inbound.api.deps import get_current_principal, get_session
from devfeed.application.dtos.article_dto import ArticleCreate, ArticleResponse
from devfeed.application.dtos.error_dto import ErrorResponse
from devfeed.application.use_cases.article_use_cases import AsyncArticleService
from devfeed.application.use_cases.subscription_use_cases import AsyncSubscriptionService
from devfeed.domain.models.principal import Principal

router = APIRouter()

OWNER_ONLY_RESPONSES = {
    403: {"model": ErrorResponse, "description": "Not the author of the article"},
    404: {"model": ErrorResponse, "description": "Article not found"},
}


@router.post(
    "",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish an article",
    responses={404: {"model": ErrorResponse, "description": "Theme not found"}},
)
async def create_article(
        request: ArticleCreate,
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncArticleService(db).create_article(principal, request)


@router.get("", response_model=List[ArticleResponse], summary="All articles, newest first")
async def list_articles(
        _: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncArticleService(db).list_articles()


# Literal paths are declared before /{article_id} so they are matched first
@router.get("/my-articles", response_model=List[ArticleResponse], summary="Articles of the current user")
async def list_my_articles(
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncArticleService(db).list_my_articles(principal)


@router.get(
    "/by-theme/{theme_id}",
    response_model=List[ArticleResponse],
    summary="Articles of a theme",
    responses={404: {"model": ErrorResponse, "description": "Theme not found"}},
)
async def list_by_theme(
        theme_id: int,
        _: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncArticleService(db).list_by_theme(theme_id)


@router.get("/search", response_model=List[ArticleResponse], summary="Search title and content")
async def search_articles(
        keyword: str = Query(..., description="Case-insensitive text to look for."),
        _: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncArticleService(db).search(keyword)


@router.get("/feed", response_model=List[ArticleResponse], summary="Articles of followed themes, newest first")
async def feed(
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncSubscriptionService(db).feed(principal)


@router.get(
    "/{article_id}",
    response_model=ArticleResponse,
    summary="Article by ID",
    responses={404: {"model": ErrorResponse, "description": "Article not found"}},
)
async def get_article(
        article_id: int,
        _: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncArticleService(db).get_article(article_id)


@router.put(
    "/{article_id}",
    response_model=ArticleResponse,
    summary="Replace an article (author only)",
    responses=OWNER_ONLY_RESPONSES,
)
async def update_article(
        article_id: int,
        request: ArticleCreate,
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncArticleService(db).update_article(principal, article_id, request)


@router.delete(
    "/{article_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an article and its comments (author only)",
    responses=OWNER_ONLY_RESPONSES,
)
async def delete_article(
        article_id: int,
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    await AsyncArticleService(db).delete_article(principal, article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
