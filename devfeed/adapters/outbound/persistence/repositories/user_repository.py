# devfeed/adapters/outbound/persistence/repositories/user_repository.py (async version)

"""
Repository for user operations.

This module implements the repository that performs database operations
related to users, implementing the IUserRepository interface.
Lookups are exact: callers normalise emails before querying.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from devfeed.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from devfeed.adapters.outbound.persistence.models import User
from devfeed.application.ports.outbound import IUserRepository
from devfeed.domain.models.principal import Principal
from devfeed.domain.exceptions import (
    DatabaseOperationException,
    UserAlreadyExistsException,
    UserNotFoundException,
)


class AsyncUserCRUD(AsyncCRUDBase[User], IUserRepository):
    """
    Async implementation of CRUD repository for the User entity.

    Extends AsyncCRUDBase with email and username lookups. A unique
    constraint violation on insert or update surfaces as
    UserAlreadyExistsException, which covers two registrations racing past
    the service-level duplicate check.
    """

    conflict_exception = UserAlreadyExistsException
    not_found_exception = UserNotFoundException

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """
        Find a user by email.

        Args:
            db: Async database session
            email: User's email

        Returns:
            User found or None if doesn't exist

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            query = select(User).where(User.email == email)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching user by email: {e}")
            raise DatabaseOperationException(
                detail="Error fetching user by email",
                original_error=e
            )

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        try:
            query = select(User).where(User.username == username)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching user by username: {e}")
            raise DatabaseOperationException(
                detail="Error fetching user by username",
                original_error=e
            )

    def to_principal(self, db_model: User) -> Principal:
        """Convert the ORM user into the immutable request principal."""
        return Principal(
            id=db_model.id,
            email=db_model.email,
            username=db_model.username,
        )


user_repository = AsyncUserCRUD(User)
