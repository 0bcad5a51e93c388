# devfeed/adapters/inbound/api/deps.py (async version)

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends() for database access, the application context and
authentication.
"""

import logging
from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.outbound.persistence.database import get_db
from devfeed.application.context import AppContext
from devfeed.application.use_cases.auth_use_cases import AsyncAuthService
from devfeed.domain.exceptions import InvalidTokenException
from devfeed.domain.models.principal import Principal

# Configure logger
logger = logging.getLogger(__name__)

# Declares the bearer scheme in the OpenAPI schema. The gate reads the raw header itself.
bearer_scheme = HTTPBearer(auto_error=False)

########################################################################
# Database Session Management
########################################################################

# Alias for get_db
get_session = get_db


########################################################################
# Application Context
########################################################################

def get_app_context(request: Request) -> AppContext:
    """Context built by create_app() for this application."""
    return request.app.state.context


async def get_auth_service(
        db: AsyncSession = Depends(get_session),
        context: AppContext = Depends(get_app_context),
) -> AsyncAuthService:
    return AsyncAuthService(db, context)


########################################################################
# User Token Authentication
########################################################################

async def get_optional_principal(
        request: Request,
        db: AsyncSession = Depends(get_session),
        context: AppContext = Depends(get_app_context),
        _: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Optional[Principal]:
    """
    Run the authentication gate for this request.

    Stores the result on ``request.state.principal`` and returns it. Never
    fails: a request without a valid token simply has no principal.
    """
    principal, _outcome = await context.gate.authenticate(db, request.headers.get("Authorization"))
    request.state.principal = principal
    return principal


async def get_current_principal(
        principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """
    Principal of the request, for endpoints that require one.

    Raises:
        InvalidTokenException: No valid, unrevoked token for an existing user
    """
    if principal is None:
        raise InvalidTokenException()
    return principal
