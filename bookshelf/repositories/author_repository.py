"""
Repository for Author entity with browse queries.

Example:
    ```python
    from bookshelf.repositories.author_repository import AuthorRepository
    from bookshelf.storage.db import async_session

    async with async_session() as session:
        repo = AuthorRepository(session)
        author = await repo.get_by_id(1)
        items, meta = await repo.browse(AuthorBrowseParams(find="john"))
    ```
"""

from sqlalchemy import or_
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from bookshelf.models.author import Author
from bookshelf.repositories.base import BaseRepository, ilike_contains
from bookshelf.schemas.filters import AuthorBrowseParams, AuthorSort, SortOrder
from bookshelf.schemas.response import MetadataModel
from bookshelf.storage.db import get_paginated_results

SORT_COLUMNS = {
    AuthorSort.PEN_NAME: Author.pen_name,
    AuthorSort.LAST_NAME: Author.last_name,
    AuthorSort.FIRST_NAME: Author.first_name,
}

SEARCH_COLUMNS = (Author.pen_name, Author.last_name, Author.first_name)


class AuthorRepository(BaseRepository[Author]):
    """
    Repository for Author entity operations.

    Provides id-based CRUD inherited from BaseRepository plus browse.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, Author)

    async def browse(
        self, params: AuthorBrowseParams
    ) -> tuple[list[Author], MetadataModel]:
        """
        Get one page of authors.

        Args:
            params: Filter, sort and page parameters. ``find`` is matched
                case-insensitively against pen name, last name and first
                name.

        Returns:
            Tuple of (authors, metadata).
        """
        conditions = []
        if params.find:
            conditions.append(
                or_(*(ilike_contains(col, params.find) for col in SEARCH_COLUMNS))
            )

        column = SORT_COLUMNS[params.sort]
        ordering = column.desc() if params.order == SortOrder.DESC else column.asc()

        query = select(Author).where(*conditions).order_by(ordering, Author.id)
        count_query = select(func.count(Author.id)).where(*conditions)

        return await get_paginated_results(
            self.session, query, count_query, params.page, params.perpage
        )
