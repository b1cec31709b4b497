"""
Tests for Author commands.

These tests verify that commands correctly encapsulate business logic
and can be tested independently of HTTP handlers.
"""

from unittest.mock import AsyncMock

import pytest

from bookshelf.commands.author_commands import (
    AddAuthorCommand,
    BrowseAuthorsCommand,
    DeleteAuthorCommand,
    EditAuthorCommand,
    EditAuthorInput,
    ReadAuthorCommand,
)
from bookshelf.exceptions import NotFoundError
from bookshelf.models.author import Author
from bookshelf.schemas.author import AuthorCreate, AuthorUpdate
from bookshelf.schemas.filters import AuthorBrowseParams
from bookshelf.schemas.response import MetadataModel


class TestBrowseAuthorsCommand:
    @pytest.mark.asyncio
    async def test_returns_page_envelope(self, author_repo):
        author_repo.browse.return_value = (
            [Author(id=1, pen_name="Ann"), Author(id=2, pen_name="Bob")],
            MetadataModel(page=2, per_page=2, total=5, pages=3),
        )
        params = AuthorBrowseParams(page=2, perpage=2)

        result = await BrowseAuthorsCommand(author_repo).execute(params)

        assert result.page == 2
        assert result.pages == 3
        assert [a.pen_name for a in result.items] == ["Ann", "Bob"]
        author_repo.browse.assert_called_once_with(params)


class TestReadAuthorCommand:
    @pytest.mark.asyncio
    async def test_read_existing(self, author_repo):
        author_repo.get_by_id.return_value = Author(
            id=1, pen_name="Ann", last_name="Smith"
        )

        result = await ReadAuthorCommand(author_repo).execute(1)

        assert result.id == 1
        assert result.last_name == "Smith"

    @pytest.mark.asyncio
    async def test_read_missing_raises_not_found(self, author_repo):
        author_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await ReadAuthorCommand(author_repo).execute(999)


class TestEditAuthorCommand:
    @pytest.mark.asyncio
    async def test_updates_only_supplied_fields(self, author_repo):
        changes = AuthorUpdate.model_validate({"lastName": "Smith"})

        result = await EditAuthorCommand(author_repo).execute(
            EditAuthorInput(id=4, changes=changes)
        )

        author_repo.update_by_id.assert_called_once_with(4, {"last_name": "Smith"})
        assert result.message == "Edit Success"
        assert result.keys == ["lastName"]
        assert result.status_code == 200

    @pytest.mark.asyncio
    async def test_zero_rows_raises_not_found(self, author_repo):
        author_repo.update_by_id.return_value = 0
        changes = AuthorUpdate.model_validate({"penName": "Ann"})

        with pytest.raises(NotFoundError):
            await EditAuthorCommand(author_repo).execute(
                EditAuthorInput(id=4, changes=changes)
            )


class TestAddAuthorCommand:
    @pytest.mark.asyncio
    async def test_returns_generated_id(self):
        mock_repo = AsyncMock()
        mock_repo.create.return_value = Author(id=7, pen_name="Ann")

        result = await AddAuthorCommand(mock_repo).execute(
            AuthorCreate(pen_name="Ann")
        )

        assert result.id == 7
        assert result.message == "Add Success"
        assert result.status_code == 201
        created = mock_repo.create.call_args.args[0]
        assert isinstance(created, Author)
        assert created.pen_name == "Ann"
        assert created.id is None


class TestDeleteAuthorCommand:
    @pytest.mark.asyncio
    async def test_delete_existing(self, author_repo):
        await DeleteAuthorCommand(author_repo).execute(3)

        author_repo.delete_by_id.assert_called_once_with(3)

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, author_repo):
        author_repo.delete_by_id.return_value = 0

        with pytest.raises(NotFoundError):
            await DeleteAuthorCommand(author_repo).execute(3)
