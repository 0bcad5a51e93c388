# devfeed/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import Optional

from devfeed.application.dtos.user_dto import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)


class IAuthUseCase(ABC):
    """Interface for the authentication use cases."""

    @abstractmethod
    async def register(self, request: RegisterRequest) -> AuthResponse:
        """Create an account and issue its first token."""

    @abstractmethod
    async def login(self, request: LoginRequest) -> AuthResponse:
        """Check credentials and issue a token."""

    @abstractmethod
    async def get_current_user(self, email: str) -> UserResponse:
        """Profile of the authenticated user."""

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> UserResponse:
        """Profile of any user."""

    @abstractmethod
    async def update_profile(self, current_email: str, request: UpdateProfileRequest) -> UserResponse:
        """Change username, email or password."""

    @abstractmethod
    def logout(self, token: Optional[str]) -> None:
        """Revoke a token until it expires."""

    @abstractmethod
    def logout_from_request(self, authorization: Optional[str]) -> None:
        """Revoke the token carried by an Authorization header."""
