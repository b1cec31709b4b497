"""
Protocol classes for structural subtyping (duck typing with type safety).

Commands depend on these interfaces rather than on concrete repositories, so
tests can hand them an ``AsyncMock`` and any class with the same methods
works in production.

Example:
    ```python
    from bookshelf.protocols import Repository
    from bookshelf.models.author import Author


    async def pen_name_of(repo: Repository[Author], id: int) -> str | None:
        author = await repo.get_by_id(id)
        return author.pen_name if author else None
    ```
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Repository(Protocol[T]):
    """
    Protocol for id-based data access.

    Type Parameters:
        T: The entity type this repository manages.
    """

    async def get_by_id(self, id: int) -> T | None:
        """
        Get entity by primary key ID.

        Args:
            id: Primary key value.

        Returns:
            Entity if found, None otherwise.
        """
        ...

    async def create(self, entity: T) -> T:
        """
        Insert a new entity.

        Args:
            entity: Entity to insert.

        Returns:
            Inserted entity with its id populated.
        """
        ...

    async def update_by_id(self, id: int, values: dict[str, Any]) -> int:
        """
        Update the given columns of one row.

        Returns:
            Number of affected rows.
        """
        ...

    async def delete_by_id(self, id: int) -> int:
        """
        Delete one row.

        Returns:
            Number of affected rows.
        """
        ...
