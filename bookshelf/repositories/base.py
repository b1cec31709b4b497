"""
Base repository with common CRUD operations.

Repositories build the parameterized SQL for one table and normalize the
results (rows, generated ids, affected row counts) for the command layer.

Example:
    ```python
    from bookshelf.repositories.base import BaseRepository
    from bookshelf.models.author import Author


    class AuthorRepository(BaseRepository[Author]):
        def __init__(self, session: AsyncSession):
            super().__init__(session, Author)
    ```
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel.ext.asyncio.session import AsyncSession

from bookshelf.logging import logger

T = TypeVar("T")

LIKE_ESCAPE = "\\"


def ilike_contains(column: Any, text: str) -> ColumnElement[bool]:
    """
    Case-insensitive substring match with LIKE wildcards escaped.

    Args:
        column: Column (or expression) to match against.
        text: Literal text to look for.

    Returns:
        SQL boolean expression ``column ILIKE '%text%'``.
    """
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return column.ilike(f"%{escaped}%", escape=LIKE_ESCAPE)


class BaseRepository(Generic[T]):
    """
    Base repository providing id-based CRUD operations.

    Type Parameters:
        T: The SQLModel type this repository manages.

    Attributes:
        session: The database session for executing queries.
        model: The SQLModel class this repository manages.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> T | None:
        """
        Get entity by primary key ID.

        Args:
            id: Primary key value.

        Returns:
            Entity if found, None otherwise.
        """
        return await self.session.get(self.model, id)

    async def create(self, entity: T) -> T:
        """
        Insert a new entity.

        Args:
            entity: The entity instance to create.

        Returns:
            The created entity with its generated id populated.

        Raises:
            SQLAlchemyError: If database operation fails.
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}")
            raise

    async def update_by_id(self, id: int, values: dict[str, Any]) -> int:
        """
        Update only the given columns of one row.

        Args:
            id: Primary key of the row to update.
            values: Column name and new value pairs. Must not be empty.

        Returns:
            Number of rows affected (0 when the id does not exist).

        Raises:
            SQLAlchemyError: If database operation fails.
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.exec(stmt)
            return result.rowcount
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating {self.model.__name__} {id}: {e}")
            raise

    async def delete_by_id(self, id: int) -> int:
        """
        Delete one row by primary key.

        Args:
            id: Primary key of the row to delete.

        Returns:
            Number of rows affected (0 when the id does not exist).

        Raises:
            SQLAlchemyError: If database operation fails.
        """
        stmt = (
            delete(self.model)
            .where(self.model.id == id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.exec(stmt)
            return result.rowcount
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting {self.model.__name__} {id}: {e}")
            raise
