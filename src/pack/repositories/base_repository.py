"""
Base repository class providing common database operations.

This class serves as a reusable foundation for repositories that interact with
the database using SQLAlchemy's async sessions. Entity-specific repositories
inherit from it and add their own queries (eager-loading options, deferred
columns, ...).

Repositories never commit: they add/flush so ids are available, and the service
layer owns the transaction boundary (commit / rollback).
"""
from pack.exceptions.base import RepositoryError, ResourceNotFoundError
from pack.exceptions.mapper import db_error_handler

import time
from typing import TypeVar, Generic, Type
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.sql import Select
import logging

from pack.database.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

# Setup logging
logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class (not an instance), e.g. Resource.
            db: The async database session, shared with the other repositories
                and the service of the same request.
        """
        self.model = model
        self.db = db

    def _select(self) -> Select:
        """
        Base SELECT used by the read methods. Subclasses override it to add
        loader options (selectinload, undefer, ...).
        """
        return select(self.model)

    # =================================================================================================================
    # Write Operations
    # =================================================================================================================

    async def save(self, entity: ModelType) -> ModelType:
        """
        Add an entity (and everything cascaded from it) to the session and flush.

        After the flush, generated primary keys and client-side defaults are set on
        the instance. Nothing is committed here.

        Raises:
            RepositoryError: if the database rejects the write.
        """
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model.__name__):
            self.db.add(entity)
            await self.db.flush()

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "repo.save.success",
            extra={
                "model": self.model.__name__,
                "operation": "save",
                "id": getattr(entity, "id", None),
                "duration_ms": duration_ms,
            },
        )
        return entity

    async def delete(self, entity: ModelType) -> None:
        """
        Delete an entity through the ORM so configured cascades (delete-orphan) apply.

        Collections that must be cascaded have to be loaded beforehand: in async code
        the ORM cannot lazy-load them during the flush.
        """
        async with db_error_handler(self.db, self.model.__name__):
            await self.db.delete(entity)
            await self.db.flush()

        logger.info(
            "repo.delete.success",
            extra={"model": self.model.__name__, "operation": "delete", "id": getattr(entity, "id", None)},
        )

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its ID.

        Returns:
            The entity if found, otherwise None

        Raises:
            RepositoryError: If an error occurs during retrieval.
        """
        try:
            result = await self.db.execute(
                self._select().where(self.model.id == entity_id)
            )
            entity = result.scalar_one_or_none()

            logger.debug(f"Retrieved {self.model.__name__} by ID: {entity_id} (found={entity is not None})")

            return entity

        except Exception as e:
            # Log and raise a domain-level error to decouple DB logic from business logic
            logger.error(
                f"Error retrieving {self.model.__name__} by ID {entity_id}: {e}")
            raise RepositoryError(
                f"Failed to retrieve {self.model.__name__}") from e

    async def get_by_id_or_raise(self, entity_id: int) -> ModelType:
        """
        Get an entity by its ID or raise ResourceNotFoundError.

        Raises:
            ResourceNotFoundError: If the entity is not found in the database.
        """
        entity = await self.get_by_id(entity_id)

        if entity is None:
            raise ResourceNotFoundError(
                f"{self.model.__name__} with id {entity_id} not found.")

        return entity

    async def get_all(self) -> list[ModelType]:
        """
        Get all entities ordered by id. No filtering and no pagination.
        """
        try:
            result = await self.db.execute(self._select().order_by(self.model.id))

            entities = result.scalars().all()

            logger.debug(
                f"Retrieved {len(entities)} {self.model.__name__} entities")

            return list(entities)

        except Exception as e:
            logger.error(f"Error retrieving all {self.model.__name__}: {e}")
            raise RepositoryError(
                f"Failed to retrieve {self.model.__name__} entities") from e

