"""Book endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, Response, status

from bookshelf.commands.book_commands import (
    AddBookCommand,
    BrowseBooksCommand,
    BrowseBooksInput,
    DeleteBookCommand,
    EditBookCommand,
    EditBookInput,
    ReadBookCommand,
)
from bookshelf.constants import MAX_ID
from bookshelf.dependencies import AuthorRepoDep, BookRepoDep
from bookshelf.schemas.book import BookCreate, BookRead, BookUpdate
from bookshelf.schemas.filters import BookBrowseParams
from bookshelf.schemas.response import (
    AddResponse,
    EditResponse,
    PageModel,
    PayloadResponse,
)
from bookshelf.settings import app_settings

router = APIRouter(prefix=f"{app_settings.API_PREFIX}/books", tags=["books"])

BookId = Annotated[int, Path(gt=0, le=MAX_ID)]


@router.get(
    "",
    response_model=PageModel[BookRead],
    summary="Browse books",
)
async def browse_books(
    params: Annotated[BookBrowseParams, Query()],
    repo: BookRepoDep,
) -> PageModel[BookRead]:
    """
    Get one page of books with their authors' pen names.

    Example:
        GET /v0/books?find=ring&sort=isbn13&order=desc
    """
    return await BrowseBooksCommand(repo).execute(BrowseBooksInput(params=params))


@router.get(
    "/{id}",
    response_model=PayloadResponse[BookRead],
    summary="Read a book",
)
async def read_book(id: BookId, repo: BookRepoDep):
    book = await ReadBookCommand(repo).execute(id)
    return PayloadResponse[BookRead](payload=book)


@router.patch(
    "/{id}",
    response_model=EditResponse,
    summary="Update a book",
)
async def edit_book(
    id: BookId,
    payload: BookUpdate,
    repo: BookRepoDep,
    author_repo: AuthorRepoDep,
) -> EditResponse:
    """
    Update only the supplied fields of a book.

    When ``author`` is supplied it must reference an author with a pen
    name, otherwise the request fails with 400 and nothing is written.
    """
    command = EditBookCommand(repo, author_repo)
    return await command.execute(EditBookInput(id=id, changes=payload))


@router.post(
    "",
    response_model=AddResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a book",
)
async def add_book(
    payload: BookCreate,
    repo: BookRepoDep,
    author_repo: AuthorRepoDep,
) -> AddResponse:
    """
    Create a new book.

    Example:
        POST /v0/books
        {"title": "The Hobbit", "isbn10": 4321987654, "author": 1}
    """
    return await AddBookCommand(repo, author_repo).execute(payload)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a book",
)
async def delete_book(id: BookId, repo: BookRepoDep) -> Response:
    await DeleteBookCommand(repo).execute(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
