"""
Base repository with the persistence operations shared by all entities.

The Repository pattern separates data access logic from business logic.
Repositories wrap one AsyncSession; acquiring and releasing that session
is the caller's job (see roster.storage.db.session_scope).

Example:
    ```python
    from roster.repositories.base import BaseRepository
    from roster.models.team import Team


    class TeamRepository(BaseRepository[Team]):
        def __init__(self, session: AsyncSession):
            super().__init__(session, Team)
    ```
"""

from typing import Generic, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from roster.exceptions import StoreFailure
from roster.logging import logger
from roster.utils.metrics import store_failures_total

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository providing save and lookup operations.

    Type Parameters:
        T: The SQLModel type this repository manages.

    Attributes:
        session: The database session for executing queries.
        model: The SQLModel class this repository manages.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        """
        Initialize repository with session and model.

        Args:
            session: Database session for executing queries.
            model: The SQLModel class to manage.
        """
        self.session = session
        self.model = model

    async def save(self, entity: T) -> None:
        """
        Persist an entity; the store assigns its id.

        The id is available on the entity once this returns. The enclosing
        session scope commits.

        Args:
            entity: The entity instance to persist.

        Raises:
            StoreFailure: If the insert fails.
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
        except SQLAlchemyError as e:
            await self.session.rollback()
            store_failures_total.labels(operation="save").inc()
            logger.error(f"Error saving {self.model.__name__}: {e}")
            raise StoreFailure(
                f"Could not save {self.model.__name__}", operation="save"
            ) from e

    async def find_by_id(self, id: int) -> T | None:
        """
        Get entity by primary key ID.

        Args:
            id: Primary key value.

        Returns:
            Entity if found, None otherwise.

        Raises:
            StoreFailure: If the lookup fails.
        """
        try:
            return await self.session.get(self.model, id)
        except SQLAlchemyError as e:
            store_failures_total.labels(operation="find").inc()
            logger.error(f"Error retrieving {self.model.__name__} {id}: {e}")
            raise StoreFailure(
                f"Could not load {self.model.__name__} {id}", operation="find"
            ) from e

    async def find_all(self) -> list[T]:
        """
        Get all entities, ordered by id.

        Raises:
            StoreFailure: If the query fails.
        """
        try:
            stmt = select(self.model).order_by(self.model.id)
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            store_failures_total.labels(operation="find").inc()
            logger.error(f"Error retrieving {self.model.__name__}: {e}")
            raise StoreFailure(
                f"Could not list {self.model.__name__}", operation="find"
            ) from e
