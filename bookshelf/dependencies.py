"""
Dependency injection configuration for FastAPI.

Routers receive repositories bound to the request's session through these
``Annotated`` aliases. Tests replace them with
``app.dependency_overrides[get_author_repository] = lambda: mock_repo``.

Example:
    ```python
    from bookshelf.dependencies import AuthorRepoDep

    @router.get("/authors/{id}")
    async def read_author(id: int, repo: AuthorRepoDep):
        return await ReadAuthorCommand(repo).execute(id)
    ```
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from bookshelf.repositories.author_repository import AuthorRepository
from bookshelf.repositories.book_repository import BookRepository
from bookshelf.storage.db import get_session

# ============================================================================
# Database Session Dependencies
# ============================================================================

# Committed and closed before the response is sent
SessionDep = Annotated[AsyncSession, Depends(get_session, scope="function")]


# ============================================================================
# Repository Dependencies
# ============================================================================


def get_author_repository(session: SessionDep) -> AuthorRepository:
    """
    Get author repository with injected database session.

    Args:
        session: Database session injected by FastAPI.

    Returns:
        AuthorRepository instance with session.
    """
    return AuthorRepository(session)


def get_book_repository(session: SessionDep) -> BookRepository:
    """
    Get book repository with injected database session.

    Both repositories of a request share the same session, so the author
    check and the book write run in one transaction.
    """
    return BookRepository(session)


AuthorRepoDep = Annotated[AuthorRepository, Depends(get_author_repository)]
BookRepoDep = Annotated[BookRepository, Depends(get_book_repository)]
