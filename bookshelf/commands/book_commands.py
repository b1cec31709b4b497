"""
Commands for Book business operations.

Every write that sets a book's author first checks that the author exists
and has a pen name. The check runs before the INSERT or UPDATE is issued.
"""

from pydantic import BaseModel

from bookshelf.commands.base import BaseCommand
from bookshelf.exceptions import InvalidReferenceError, NotFoundError
from bookshelf.logging import logger
from bookshelf.models.author import Author
from bookshelf.models.book import Book
from bookshelf.protocols import Repository
from bookshelf.repositories.book_repository import BookRepository
from bookshelf.schemas.book import BookCreate, BookRead, BookUpdate
from bookshelf.schemas.filters import BookBrowseParams
from bookshelf.schemas.response import (
    AddResponse,
    EditResponse,
    PageModel,
    page_of,
)


# ============================================================================
# Input Models
# ============================================================================


class BrowseBooksInput(BaseModel):  # type: ignore[misc]
    """Input model for browsing books, optionally of a single author."""

    params: BookBrowseParams
    author_id: int | None = None


class EditBookInput(BaseModel):  # type: ignore[misc]
    """Input model for a partial book update."""

    id: int
    changes: BookUpdate


# ============================================================================
# Helpers
# ============================================================================


def to_book_read(book: Book, pen_name: str) -> BookRead:
    return BookRead(**book.model_dump(), pen_name=pen_name)


async def ensure_valid_author(
    repository: Repository[Author], author_id: int
) -> None:
    """
    Check that a book may reference the given author.

    Args:
        repository: Author repository.
        author_id: Referenced author id.

    Raises:
        InvalidReferenceError: If the author is missing or has no pen name.
    """
    author = await repository.get_by_id(author_id)
    if author is None or not author.pen_name:
        logger.warning(f"Rejected reference to invalid author {author_id}")
        raise InvalidReferenceError()


# ============================================================================
# Commands
# ============================================================================


class BrowseBooksCommand(BaseCommand[BrowseBooksInput, PageModel[BookRead]]):
    """Command to get one page of books, each with its author's pen name."""

    def __init__(self, repository: BookRepository):
        self.repository = repository

    async def execute(self, input_data: BrowseBooksInput) -> PageModel[BookRead]:
        rows, meta = await self.repository.browse(
            input_data.params, author_id=input_data.author_id
        )
        return page_of([to_book_read(book, pen) for book, pen in rows], meta)


class ReadBookCommand(BaseCommand[int, BookRead]):
    """
    Command to get a single book with its author's pen name.

    A book whose author row is gone is reported as not found.
    """

    def __init__(self, repository: BookRepository):
        self.repository = repository

    async def execute(self, input_data: int) -> BookRead:
        row = await self.repository.get_with_pen_name(input_data)
        if row is None:
            raise NotFoundError()
        book, pen_name = row
        return to_book_read(book, pen_name)


class EditBookCommand(BaseCommand[EditBookInput, EditResponse]):
    """Command to update only the supplied fields of a book."""

    def __init__(
        self,
        repository: Repository[Book],
        author_repository: Repository[Author],
    ):
        self.repository = repository
        self.author_repository = author_repository

    async def execute(self, input_data: EditBookInput) -> EditResponse:
        """
        Execute command to edit a book.

        Args:
            input_data: Book id and validated partial payload.

        Returns:
            Edit confirmation listing the supplied keys.

        Raises:
            InvalidReferenceError: If ``author`` is supplied and invalid.
            NotFoundError: If no book has this id.
        """
        changes = input_data.changes
        values = changes.changes()
        if "author" in values:
            await ensure_valid_author(self.author_repository, values["author"])

        updated = await self.repository.update_by_id(input_data.id, values)
        if not updated:
            raise NotFoundError()

        logger.info(f"Updated book {input_data.id}")
        return EditResponse(keys=changes.changed_keys())


class AddBookCommand(BaseCommand[BookCreate, AddResponse]):
    """Command to create a new book for an existing author."""

    def __init__(
        self,
        repository: Repository[Book],
        author_repository: Repository[Author],
    ):
        self.repository = repository
        self.author_repository = author_repository

    async def execute(self, input_data: BookCreate) -> AddResponse:
        """
        Raises:
            InvalidReferenceError: If the author is missing or has no pen
                name. Nothing is inserted in that case.
        """
        await ensure_valid_author(self.author_repository, input_data.author)
        book = await self.repository.create(Book(**input_data.model_dump()))
        logger.info(f"Created book {book.id}")
        return AddResponse(id=book.id)


class DeleteBookCommand(BaseCommand[int, None]):
    """Command to delete a book."""

    def __init__(self, repository: Repository[Book]):
        self.repository = repository

    async def execute(self, input_data: int) -> None:
        deleted = await self.repository.delete_by_id(input_data)
        if not deleted:
            raise NotFoundError()
        logger.info(f"Deleted book {input_data}")
