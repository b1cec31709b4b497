"""
Repository for Book entity.

Reads and browses join each book with its author so that results carry the
author's pen name. Books whose author row is missing are not returned.
"""

from typing import Any

from sqlalchemy import String, cast, or_
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from bookshelf.models.author import Author
from bookshelf.models.book import Book
from bookshelf.repositories.base import BaseRepository, ilike_contains
from bookshelf.schemas.filters import BookBrowseParams, BookSort, SortOrder
from bookshelf.schemas.response import MetadataModel
from bookshelf.storage.db import get_paginated_results

SORT_COLUMNS = {
    BookSort.TITLE: Book.title,
    BookSort.ISBN10: Book.isbn10,
    BookSort.ISBN13: Book.isbn13,
    BookSort.AUTHOR: Book.author,
}

SEARCH_COLUMNS = (
    Book.title,
    Book.synopsis,
    cast(Book.isbn10, String),
    cast(Book.isbn13, String),
)

BookWithPenName = tuple[Book, str]


class BookRepository(BaseRepository[Book]):
    """Repository for Book entity operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Book)

    @staticmethod
    def _joined() -> Any:
        return select(Book, Author.pen_name).join(
            Author, Book.author == Author.id
        )

    async def get_with_pen_name(self, id: int) -> BookWithPenName | None:
        """
        Get a book together with its author's pen name.

        Args:
            id: Book id.

        Returns:
            ``(book, pen_name)`` if found, None otherwise.
        """
        result = await self.session.exec(self._joined().where(Book.id == id))
        row = result.first()
        if row is None:
            return None
        book, pen_name = row
        return book, pen_name

    async def browse(
        self, params: BookBrowseParams, author_id: int | None = None
    ) -> tuple[list[BookWithPenName], MetadataModel]:
        """
        Get one page of books.

        Args:
            params: Filter, sort and page parameters. ``find`` is matched
                case-insensitively against title, synopsis and both ISBNs.
            author_id: When given, only books of this author are returned.

        Returns:
            Tuple of (``(book, pen_name)`` rows, metadata).
        """
        conditions = []
        if author_id is not None:
            conditions.append(Book.author == author_id)
        if params.find:
            conditions.append(
                or_(*(ilike_contains(col, params.find) for col in SEARCH_COLUMNS))
            )

        column = SORT_COLUMNS[params.sort]
        ordering = column.desc() if params.order == SortOrder.DESC else column.asc()

        query = self._joined().where(*conditions).order_by(ordering, Book.id)
        count_query = (
            select(func.count(Book.id))
            .join(Author, Book.author == Author.id)
            .where(*conditions)
        )

        rows, meta = await get_paginated_results(
            self.session, query, count_query, params.page, params.perpage
        )
        return [(book, pen_name) for book, pen_name in rows], meta
