"""
Commands for Author business operations.

Example:
    ```python
    from bookshelf.commands.author_commands import EditAuthorCommand, EditAuthorInput

    command = EditAuthorCommand(repo)
    result = await command.execute(
        EditAuthorInput(id=1, changes=AuthorUpdate(pen_name="Ann"))
    )
    ```
"""

from pydantic import BaseModel

from bookshelf.commands.base import BaseCommand
from bookshelf.exceptions import NotFoundError
from bookshelf.logging import logger
from bookshelf.models.author import Author
from bookshelf.protocols import Repository
from bookshelf.repositories.author_repository import AuthorRepository
from bookshelf.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from bookshelf.schemas.filters import AuthorBrowseParams
from bookshelf.schemas.response import (
    AddResponse,
    EditResponse,
    PageModel,
    page_of,
)


# ============================================================================
# Input Models
# ============================================================================


class EditAuthorInput(BaseModel):  # type: ignore[misc]
    """Input model for a partial author update."""

    id: int
    changes: AuthorUpdate


# ============================================================================
# Commands
# ============================================================================


class BrowseAuthorsCommand(BaseCommand[AuthorBrowseParams, PageModel[AuthorRead]]):
    """
    Command to get one page of authors.

    Note: Uses concrete AuthorRepository type instead of Repository[Author]
    protocol because it requires the browse() extension method.
    """

    def __init__(self, repository: AuthorRepository):
        self.repository = repository

    async def execute(
        self, input_data: AuthorBrowseParams
    ) -> PageModel[AuthorRead]:
        authors, meta = await self.repository.browse(input_data)
        return page_of([AuthorRead.model_validate(a) for a in authors], meta)


class ReadAuthorCommand(BaseCommand[int, AuthorRead]):
    """Command to get a single author by id."""

    def __init__(self, repository: Repository[Author]):
        self.repository = repository

    async def execute(self, input_data: int) -> AuthorRead:
        """
        Execute command to read an author.

        Args:
            input_data: Author id.

        Returns:
            The author.

        Raises:
            NotFoundError: If no author has this id.
        """
        author = await self.repository.get_by_id(input_data)
        if author is None:
            raise NotFoundError()
        return AuthorRead.model_validate(author)


class EditAuthorCommand(BaseCommand[EditAuthorInput, EditResponse]):
    """
    Command to update only the supplied fields of an author.

    Issues a single UPDATE; a zero row count means the id does not exist.
    """

    def __init__(self, repository: Repository[Author]):
        self.repository = repository

    async def execute(self, input_data: EditAuthorInput) -> EditResponse:
        """
        Execute command to edit an author.

        Args:
            input_data: Author id and validated partial payload.

        Returns:
            Edit confirmation listing the supplied keys.

        Raises:
            NotFoundError: If no author has this id.
        """
        changes = input_data.changes
        updated = await self.repository.update_by_id(
            input_data.id, changes.changes()
        )
        if not updated:
            raise NotFoundError()

        logger.info(f"Updated author {input_data.id}")
        return EditResponse(keys=changes.changed_keys())


class AddAuthorCommand(BaseCommand[AuthorCreate, AddResponse]):
    """Command to create a new author."""

    def __init__(self, repository: Repository[Author]):
        self.repository = repository

    async def execute(self, input_data: AuthorCreate) -> AddResponse:
        author = await self.repository.create(Author(**input_data.model_dump()))
        logger.info(f"Created author {author.id}")
        return AddResponse(id=author.id)


class DeleteAuthorCommand(BaseCommand[int, None]):
    """
    Command to delete an author.

    Books of the author are left in place; they stop appearing in reads
    and browses because those join on the author.
    """

    def __init__(self, repository: Repository[Author]):
        self.repository = repository

    async def execute(self, input_data: int) -> None:
        """
        Raises:
            NotFoundError: If no author has this id.
        """
        deleted = await self.repository.delete_by_id(input_data)
        if not deleted:
            raise NotFoundError()
        logger.info(f"Deleted author {input_data}")
