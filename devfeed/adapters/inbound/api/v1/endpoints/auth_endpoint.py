# devfeed/adapters/inbound/api/v1/endpoints/auth_endpoint.py (async version)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import PlainTextResponse

from devfeed.adapters.inbound.api.deps import get_auth_service, get_current_principal
from devfeed.application.dtos.error_dto import ErrorResponse
from devfeed.application.dtos.user_dto import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from devfeed.application.use_cases.auth_use_cases import AsyncAuthService
from devfeed.domain.models.principal import Principal

logger = logging.getLogger(__name__)
router = APIRouter()

HEALTH_MESSAGE = "Authentication service is running"


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register - Creates an account and returns a token",
    description="""
    Creates a new user and logs it in.

    The password must meet the following criteria:
    - Between 8 and 100 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one special character among @#$%^&+=!?.,:;()[]{}|-_~`
    - No whitespace
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Email or username already in use"},
    },
)
async def register(
        request: RegisterRequest,
        service: AsyncAuthService = Depends(get_auth_service),
):
    return await service.register(request)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login - Exchanges email and password for a token",
    responses={401: {"model": ErrorResponse, "description": "Invalid email or password"}},
)
async def login(
        request: LoginRequest,
        service: AsyncAuthService = Depends(get_auth_service),
):
    return await service.login(request)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
    responses={401: {"model": ErrorResponse, "description": "Invalid token"}},
)
async def me(
        principal: Principal = Depends(get_current_principal),
        service: AsyncAuthService = Depends(get_auth_service),
):
    return await service.get_current_user(principal.email)


@router.put(
    "/update-profile",
    response_model=UserResponse,
    summary="Update profile",
    description=(
            "Changes username, email and/or password of the current user. "
            "Absent or blank fields are left unchanged."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        401: {"model": ErrorResponse, "description": "Invalid token"},
        409: {"model": ErrorResponse, "description": "Email or username already in use"},
    },
)
async def update_profile(
        request: UpdateProfileRequest,
        principal: Principal = Depends(get_current_principal),
        service: AsyncAuthService = Depends(get_auth_service),
):
    return await service.update_profile(principal.email, request)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout - Revokes the bearer token",
    description=(
            "Revokes the token carried in the Authorization header until it expires. "
            "Calling it again with the same token succeeds."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Missing or non-Bearer Authorization header"},
        401: {"model": ErrorResponse, "description": "Token not issued by this service"},
    },
)
async def logout(
        authorization: Optional[str] = Header(None),
        service: AsyncAuthService = Depends(get_auth_service),
):
    service.logout_from_request(authorization)
    return MessageResponse(message="Logout successful")


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Health check",
)
async def health():
    return HEALTH_MESSAGE


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    summary="User by ID",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid token"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_user(
        user_id: int,
        _: Principal = Depends(get_current_principal),
        service: AsyncAuthService = Depends(get_auth_service),
):
    return await service.get_user_by_id(user_id)
