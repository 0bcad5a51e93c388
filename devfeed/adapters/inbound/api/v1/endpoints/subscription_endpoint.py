# devfeed/adapters/inbound/api/v1/endpoints/subscription_endpoint.py (async version)

"""
Theme subscriptions, mounted under /themes ahead of the theme routes so that
/themes/subscriptions is not read as a theme ID.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.inbound.api.deps import get_current_principal, get_session
from devfeed.application.dtos.error_dto import ErrorResponse
from devfeed.application.use_cases.subscription_use_cases import AsyncSubscriptionService
from devfeed.domain.models.principal import Principal

router = APIRouter()

THEME_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Theme not found"}}


@router.get("/subscriptions", response_model=List[int], summary="IDs of the themes followed by the current user")
async def list_subscriptions(
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncSubscriptionService(db).list_subscriptions(principal)


@router.post(
    "/{theme_id}/subscribe",
    response_class=Response,
    summary="Subscribe to a theme",
    description="Subscribing to a theme already followed changes nothing.",
    responses=THEME_NOT_FOUND,
)
async def subscribe(
        theme_id: int,
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    await AsyncSubscriptionService(db).subscribe(principal, theme_id)
    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{theme_id}/subscribe",
    response_class=Response,
    summary="Unsubscribe from a theme",
    responses=THEME_NOT_FOUND,
)
async def unsubscribe(
        theme_id: int,
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
):
    await AsyncSubscriptionService(db).unsubscribe(principal, theme_id)
    return Response(status_code=status.HTTP_200_OK)
