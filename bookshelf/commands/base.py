"""
Base command for encapsulating business operations.

A command holds the repositories it needs and performs one operation in
``execute()``. Routers build the command from injected repositories, so the
same logic is testable without HTTP.

Example:
    ```python
    from bookshelf.commands.base import BaseCommand


    class ReadAuthorCommand(BaseCommand[int, AuthorRead]):
        def __init__(self, repository: Repository[Author]):
            self.repository = repository

        async def execute(self, input_data: int) -> AuthorRead:
            author = await self.repository.get_by_id(input_data)
            if author is None:
                raise NotFoundError()
            return AuthorRead.model_validate(author)


    @router.get("/authors/{id}")
    async def read_author(id: int, repo: AuthorRepoDep):
        return await ReadAuthorCommand(repo).execute(id)
    ```
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


class BaseCommand(ABC, Generic[TInput, TOutput]):
    """
    Base command for business operations.

    Type Parameters:
        TInput: Input data type (usually a Pydantic model or an id).
        TOutput: Output data type.
    """

    @abstractmethod
    async def execute(self, input_data: TInput) -> TOutput:
        """
        Execute the command.

        Args:
            input_data: Input data for the command.

        Returns:
            Result of the command execution.

        Raises:
            AppException: For business rule violations (not found,
                invalid reference).
            SQLAlchemyError: When the underlying query fails.
        """
        pass
