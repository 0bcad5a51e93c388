# devfeed/adapters/inbound/api/v1/endpoints/theme_endpoint.py (async version)

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.inbound.api.deps import get_current_principal, get_session
from devfeed.application.dtos.error_dto import ErrorResponse
from devfeed.application.dtos.theme_dto import ThemeCreate, ThemeResponse
from devfeed.application.use_cases.theme_use_cases import AsyncThemeService

router = APIRouter(dependencies=[Depends(get_current_principal)])


@router.get("", response_model=List[ThemeResponse], summary="List themes")
async def list_themes(db: AsyncSession = Depends(get_session)):
    return await AsyncThemeService(db).list_themes()


@router.get(
    "/{theme_id}",
    response_model=ThemeResponse,
    summary="Theme by ID",
    responses={404: {"model": ErrorResponse, "description": "Theme not found"}},
)
async def get_theme(theme_id: int, db: AsyncSession = Depends(get_session)):
    return await AsyncThemeService(db).get_theme(theme_id)


@router.post(
    "",
    response_model=ThemeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a theme",
    responses={409: {"model": ErrorResponse, "description": "Theme name already in use"}},
)
async def create_theme(request: ThemeCreate, db: AsyncSession = Depends(get_session)):
    return await AsyncThemeService(db).create_theme(request)


@router.put(
    "/{theme_id}",
    response_model=ThemeResponse,
    summary="Rename or redescribe a theme",
    responses={
        404: {"model": ErrorResponse, "description": "Theme not found"},
        409: {"model": ErrorResponse, "description": "Theme name already in use"},
    },
)
async def update_theme(theme_id: int, request: ThemeCreate, db: AsyncSession = Depends(get_session)):
    return await AsyncThemeService(db).update_theme(theme_id, request)


@router.delete(
    "/{theme_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a theme and its subscriptions",
    responses={
        404: {"model": ErrorResponse, "description": "Theme not found"},
        409: {"model": ErrorResponse, "description": "Theme still has articles"},
    },
)
async def delete_theme(theme_id: int, db: AsyncSession = Depends(get_session)):
    await AsyncThemeService(db).delete_theme(theme_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
