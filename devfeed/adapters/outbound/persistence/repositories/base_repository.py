# devfeed/adapters/outbound/persistence/repositories/base_repository.py (async version)

from typing import Any, Dict, Generic, Optional, Type, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.future import select
import logging

from devfeed.adapters.outbound.persistence.models.base_model import Base
from devfeed.domain.exceptions import (
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    DatabaseOperationException
)

# Define generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell a uniqueness conflict apart from other integrity errors (FK, NOT NULL)."""
    error_msg = str(error.orig if error.orig is not None else error).lower()
    return "unique" in error_msg or "duplicate" in error_msg


class AsyncCRUDBase(Generic[ModelType]):
    """
    Async base class for implementing the Repository pattern.

    Provides generic CRUD operations that can be used by any entity.
    Includes consistent error handling and logging.

    Subclasses override ``conflict_exception`` to choose what a uniqueness
    violation becomes.

    Attributes:
        model: SQLAlchemy model class
        logger: Configured logger for the class
    """

    conflict_exception: Type[ResourceAlreadyExistsException] = ResourceAlreadyExistsException
    not_found_exception: Type[ResourceNotFoundException] = ResourceNotFoundException

    def __init__(self, model: Type[ModelType]):
        """
        Initialize the repository with an SQLAlchemy model.

        Args:
            model: SQLAlchemy model class associated with this repository
        """
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        Get an entity by ID.

        Args:
            db: Async database session
            id: ID of the entity

        Returns:
            Entity found or None if it doesn't exist
        """
        try:
            query = select(self.model).where(self.model.id == id)
            result = await db.execute(query)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with ID {id}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__}",
                original_error=e
            )

    async def get_or_raise(self, db: AsyncSession, id: Any) -> ModelType:
        """Same as get(), raising the repository's not-found exception instead of returning None."""
        obj = await self.get(db, id)
        if obj is None:
            raise self.not_found_exception(resource_id=id)
        return obj

    async def _reload(self, db: AsyncSession, id: Any) -> ModelType:
        # populate_existing re-runs the model's eager loaders on the identity-mapped instance
        query = select(self.model).where(self.model.id == id).execution_options(populate_existing=True)
        result = await db.execute(query)
        return result.unique().scalar_one()

    async def get_by_field(self, db: AsyncSession, field_name: str, value: Any) -> Optional[ModelType]:
        """
        Get an entity by the value of a specific field.

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(self.model).where(getattr(self.model, field_name) == value)
            result = await db.execute(query)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} by {field_name}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__} by {field_name}",
                original_error=e
            )

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new entity.

        Args:
            db: Async database session
            obj_in: Column values of the new entity

        Returns:
            Newly created entity

        Raises:
            ResourceAlreadyExistsException: If the entity already exists
            DatabaseOperationException: If another database error occurs
        """
        try:
            db_obj = self.model(**obj_in)

            db.add(db_obj)
            await db.commit()
            db_obj = await self._reload(db, db_obj.id)

            self.logger.info(f"{self.model.__name__} created with ID: {db_obj.id}")
            return db_obj

        except IntegrityError as e:
            await db.rollback()
            if is_unique_violation(e):
                self.logger.warning(f"Attempt to create duplicate {self.model.__name__}")
                raise self.conflict_exception()
            self.logger.error(f"Integrity error creating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(original_error=e)

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error creating {self.model.__name__}",
                original_error=e
            )

    async def update(self, db: AsyncSession, *, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """
        Update an existing entity with the given column values.

        Raises:
            ResourceAlreadyExistsException: If the update violates a uniqueness constraint
            DatabaseOperationException: If another database error occurs
        """
        try:
            for field, value in obj_in.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)

            db.add(db_obj)
            await db.commit()
            db_obj = await self._reload(db, db_obj.id)

            self.logger.info(f"{self.model.__name__} with ID {db_obj.id} updated")
            return db_obj

        except IntegrityError as e:
            await db.rollback()
            if is_unique_violation(e):
                self.logger.warning(f"Uniqueness violation updating {self.model.__name__}")
                raise self.conflict_exception()
            self.logger.error(f"Integrity error updating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(original_error=e)

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error updating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error updating {self.model.__name__}",
                original_error=e
            )

    async def remove(self, db: AsyncSession, *, db_obj: ModelType) -> None:
        """
        Remove an entity.

        Raises:
            DatabaseOperationException: If an error occurs during removal
        """
        obj_id = db_obj.id
        try:
            await db.delete(db_obj)
            await db.commit()
            self.logger.info(f"{self.model.__name__} with ID {obj_id} removed")

        except IntegrityError as e:
            await db.rollback()
            self.logger.error(f"Integrity error removing {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Cannot remove {self.model.__name__} as it is being used by other entities",
                original_error=e
            )

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error removing {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error removing {self.model.__name__}",
                original_error=e
            )
