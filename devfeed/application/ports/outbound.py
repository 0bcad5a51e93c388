# devfeed/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.domain.models.principal import Principal


class IUserRepository(ABC):
    """User repository interface, the only store the authentication core reads."""

    @abstractmethod
    async def get(self, db: AsyncSession, id: Any):
        """Get user by ID."""

    @abstractmethod
    async def get_by_email(self, db: AsyncSession, email: str):
        """Get user by email (exact match)."""

    @abstractmethod
    async def get_by_username(self, db: AsyncSession, username: str):
        """Get user by username (exact match)."""

    @abstractmethod
    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]):
        """Persist a new user. The password must already be hashed."""

    @abstractmethod
    async def update(self, db: AsyncSession, *, db_obj, obj_in: Dict[str, Any]):
        """Apply column changes to an existing user."""

    @abstractmethod
    def to_principal(self, db_model) -> Principal:
        """Convert a stored user into the request principal."""


class IArticleRepository(ABC):
    """Article queries needed beyond plain CRUD."""

    @abstractmethod
    async def list_recent(self, db: AsyncSession, **filters) -> List[Any]:
        """Articles newest first, optionally filtered by author or theme."""

    @abstractmethod
    async def search(self, db: AsyncSession, keyword: str) -> List[Any]:
        """Articles whose title or content contains ``keyword``."""

    @abstractmethod
    async def feed_for(self, db: AsyncSession, user_id: int) -> List[Any]:
        """Articles of the themes ``user_id`` subscribes to."""


class ISubscriptionRepository(ABC):

    @abstractmethod
    async def get_for(self, db: AsyncSession, user_id: int, theme_id: int) -> Optional[Any]:
        """The subscription row of a user to a theme, if any."""

    @abstractmethod
    async def theme_ids_for_user(self, db: AsyncSession, user_id: int) -> List[int]:
        """IDs of the themes a user follows, oldest subscription first."""
