# devfeed/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from devfeed.adapters.inbound.api.v1.endpoints import (
    article_endpoint,
    auth_endpoint,
    comment_endpoint,
    subscription_endpoint,
    theme_endpoint,
)

api_router = APIRouter()

api_router.include_router(auth_endpoint.router, prefix="/auth", tags=["Authentication"])
# Before the theme routes, which would take "subscriptions" for a theme ID
api_router.include_router(subscription_endpoint.router, prefix="/themes", tags=["Subscriptions"])
api_router.include_router(theme_endpoint.router, prefix="/themes", tags=["Themes"])
api_router.include_router(article_endpoint.router, prefix="/articles", tags=["Articles"])
api_router.include_router(comment_endpoint.router, prefix="/comments", tags=["Comments"])
