# devfeed/application/use_cases/auth_use_cases.py (async version)

"""
Service for user authentication.

This module implements registration, login, profile reading and update, and
logout. Inputs arrive already validated and normalised by the request DTOs.
bcrypt work runs in a worker thread so it does not block the event loop.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.outbound.persistence.repositories.user_repository import user_repository
from devfeed.adapters.outbound.security.authentication_gate import BEARER_PREFIX
from devfeed.adapters.outbound.security.token_codec import mask_subject
from devfeed.application.context import AppContext
from devfeed.application.ports.inbound import IAuthUseCase
from devfeed.application.dtos.user_dto import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from devfeed.domain.exceptions import (
    InvalidAuthorizationHeaderException,
    InvalidCredentialsException,
    UserAlreadyExistsException,
    UserNotFoundException,
)

logger = logging.getLogger(__name__)


class AsyncAuthService(IAuthUseCase):
    """
    Service for user authentication.

    Credential failures are reported identically whatever their cause, and an
    unknown email costs one bcrypt verification like a wrong password does.
    """

    def __init__(self, db_session: AsyncSession, context: AppContext):
        """
        Initialize the service with a database session.

        Args:
            db_session: Active SQLAlchemy session
            context: Application context holding hasher, codec and revocations
        """
        self.db = db_session
        self.context = context

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create an account and log it in.

        Raises:
            UserAlreadyExistsException: If the email or username is already taken
        """
        if await user_repository.get_by_email(self.db, request.email):
            logger.warning(f"Registration with existing email {mask_subject(request.email)}")
            raise UserAlreadyExistsException("Email is already in use")

        if await user_repository.get_by_username(self.db, request.username):
            logger.warning(f"Registration with existing username {request.username}")
            raise UserAlreadyExistsException("Username is already in use")

        hashed_password = await asyncio.to_thread(self.context.hasher.hash, request.password)
        user = await user_repository.create(
            self.db,
            obj_in={
                "email": request.email,
                "username": request.username,
                "password": hashed_password,
            },
        )

        logger.info(f"User {user.id} registered")
        return self._issue_token(user)

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Check credentials and issue a token.

        Raises:
            InvalidCredentialsException: Unknown email or wrong password
        """
        user = await user_repository.get_by_email(self.db, request.email)

        if user is None:
            await asyncio.to_thread(self.context.hasher.verify_dummy, request.password)
            logger.warning(f"Login failed for {mask_subject(request.email)}")
            raise InvalidCredentialsException()

        if not await asyncio.to_thread(self.context.hasher.verify, request.password, user.password):
            logger.warning(f"Login failed for {mask_subject(request.email)}")
            raise InvalidCredentialsException()

        logger.info(f"User {user.id} logged in")
        return self._issue_token(user)

    async def get_current_user(self, email: str) -> UserResponse:
        user = await user_repository.get_by_email(self.db, email)
        if user is None:
            raise UserNotFoundException()
        return UserResponse.model_validate(user)

    async def get_user_by_id(self, user_id: int) -> UserResponse:
        user = await user_repository.get(self.db, user_id)
        if user is None:
            raise UserNotFoundException(resource_id=user_id)
        return UserResponse.model_validate(user)

    async def update_profile(self, current_email: str, request: UpdateProfileRequest) -> UserResponse:
        """
        Apply the non-blank fields of ``request`` that differ from the stored values.

        The new password is re-hashed. Nothing is written when no field changes.
        Changing the email does not revoke existing tokens, but they stop
        resolving since their subject no longer matches a user.

        Raises:
            UserNotFoundException: If the current user no longer exists
            UserAlreadyExistsException: If the new email or username is taken
        """
        user = await user_repository.get_by_email(self.db, current_email)
        if user is None:
            raise UserNotFoundException()

        changes: Dict[str, Any] = {}

        if request.username and request.username != user.username:
            if await user_repository.get_by_username(self.db, request.username):
                raise UserAlreadyExistsException("Username is already in use")
            changes["username"] = request.username

        if request.email and request.email != user.email:
            if await user_repository.get_by_email(self.db, request.email):
                raise UserAlreadyExistsException("Email is already in use")
            changes["email"] = request.email

        if request.password:
            changes["password"] = await asyncio.to_thread(self.context.hasher.hash, request.password)

        if not changes:
            logger.debug(f"Profile update of user {user.id} changed nothing")
            return UserResponse.model_validate(user)

        user = await user_repository.update(self.db, db_obj=user, obj_in=changes)
        logger.info(f"User {user.id} updated fields: {', '.join(sorted(changes))}")
        return UserResponse.model_validate(user)

    def logout(self, token: Optional[str]) -> None:
        """
        Revoke ``token`` until it expires. Calling it twice is harmless.

        Raises:
            InvalidTokenException: If the token is malformed or not signed by us
        """
        if not token or not token.strip():
            logger.warning("Logout called with an empty token")
            return

        expires_at = self.context.codec.expiry(token)
        self.context.revocations.revoke(token, expires_at)

    def logout_from_request(self, authorization: Optional[str]) -> None:
        """
        Logout using the raw ``Authorization`` header value.

        Raises:
            InvalidAuthorizationHeaderException: Missing or non-Bearer header
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise InvalidAuthorizationHeaderException()
        self.logout(authorization[len(BEARER_PREFIX):].strip())

    def _issue_token(self, user) -> AuthResponse:
        token = self.context.codec.sign(user.email, self.context.clock(), self.context.token_ttl)
        return AuthResponse(
            token=token,
            username=user.username,
            email=user.email,
            expires_in=self.context.settings.token_ttl_seconds,
        )
