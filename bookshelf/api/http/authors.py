"""
Author endpoints.

Each endpoint validates its input through FastAPI, builds the matching
command from injected repositories and returns the command's result.
Errors raised by commands are rendered by the application's exception
handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Path, Query, Response, status

from bookshelf.commands.author_commands import (
    AddAuthorCommand,
    BrowseAuthorsCommand,
    DeleteAuthorCommand,
    EditAuthorCommand,
    EditAuthorInput,
    ReadAuthorCommand,
)
from bookshelf.commands.book_commands import BrowseBooksCommand, BrowseBooksInput
from bookshelf.constants import MAX_ID
from bookshelf.dependencies import AuthorRepoDep, BookRepoDep
from bookshelf.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from bookshelf.schemas.book import BookRead
from bookshelf.schemas.filters import AuthorBrowseParams, BookBrowseParams
from bookshelf.schemas.response import (
    AddResponse,
    EditResponse,
    PageModel,
    PayloadResponse,
)
from bookshelf.settings import app_settings

router = APIRouter(prefix=f"{app_settings.API_PREFIX}/authors", tags=["authors"])

AuthorId = Annotated[int, Path(gt=0, le=MAX_ID)]


@router.get(
    "",
    response_model=PageModel[AuthorRead],
    summary="Browse authors",
)
async def browse_authors(
    params: Annotated[AuthorBrowseParams, Query()],
    repo: AuthorRepoDep,
) -> PageModel[AuthorRead]:
    """
    Get one page of authors.

    Example:
        GET /v0/authors?find=tolk&sort=lastName&order=desc&page=2&perpage=20
    """
    return await BrowseAuthorsCommand(repo).execute(params)


@router.get(
    "/{id}",
    response_model=PayloadResponse[AuthorRead],
    summary="Read an author",
)
async def read_author(id: AuthorId, repo: AuthorRepoDep):
    author = await ReadAuthorCommand(repo).execute(id)
    return PayloadResponse[AuthorRead](payload=author)


@router.patch(
    "/{id}",
    response_model=EditResponse,
    summary="Update an author",
)
async def edit_author(
    id: AuthorId, payload: AuthorUpdate, repo: AuthorRepoDep
) -> EditResponse:
    """
    Update only the supplied fields of an author.

    Example:
        PATCH /v0/authors/1
        {"firstName": "John"}
    """
    command = EditAuthorCommand(repo)
    return await command.execute(EditAuthorInput(id=id, changes=payload))


@router.post(
    "",
    response_model=AddResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
)
async def add_author(payload: AuthorCreate, repo: AuthorRepoDep) -> AddResponse:
    """
    Create a new author.

    Example:
        POST /v0/authors
        {"penName": "J.R.R. Tolkien", "lastName": "Tolkien"}
    """
    return await AddAuthorCommand(repo).execute(payload)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an author",
)
async def delete_author(id: AuthorId, repo: AuthorRepoDep) -> Response:
    await DeleteAuthorCommand(repo).execute(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{id}/books",
    response_model=PageModel[BookRead],
    summary="Browse books of an author",
)
async def browse_author_books(
    id: AuthorId,
    params: Annotated[BookBrowseParams, Query()],
    repo: BookRepoDep,
) -> PageModel[BookRead]:
    """
    Get one page of the books written by an author.

    An unknown author id yields an empty page rather than 404.
    """
    command = BrowseBooksCommand(repo)
    return await command.execute(BrowseBooksInput(params=params, author_id=id))
