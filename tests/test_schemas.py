"""Tests for request payload and query parameter schemas."""

import pytest
from pydantic import ValidationError

from bookshelf.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from bookshelf.schemas.book import BookCreate, BookRead, BookUpdate
from bookshelf.schemas.filters import (
    AuthorBrowseParams,
    AuthorSort,
    BookBrowseParams,
    BookSort,
    SortOrder,
)


class TestAuthorCreate:
    def test_accepts_camel_case_keys(self):
        author = AuthorCreate.model_validate(
            {"penName": "Tolkien", "lastName": "Tolkien", "firstName": "John"}
        )

        assert author.pen_name == "Tolkien"
        assert author.last_name == "Tolkien"
        assert author.first_name == "John"

    def test_pen_name_is_required(self):
        with pytest.raises(ValidationError):
            AuthorCreate.model_validate({"lastName": "Tolkien"})

    @pytest.mark.parametrize("pen_name", ["A", "x" * 101])
    def test_pen_name_length(self, pen_name):
        with pytest.raises(ValidationError):
            AuthorCreate.model_validate({"penName": pen_name})

    def test_rejects_null_optional_field(self):
        with pytest.raises(ValidationError):
            AuthorCreate.model_validate({"penName": "Tolkien", "lastName": None})

    def test_rejects_unknown_key(self):
        with pytest.raises(ValidationError):
            AuthorCreate.model_validate({"penName": "Tolkien", "age": 81})


class TestAuthorUpdate:
    def test_requires_at_least_one_field(self):
        with pytest.raises(ValidationError):
            AuthorUpdate.model_validate({})

    def test_rejects_null(self):
        with pytest.raises(ValidationError):
            AuthorUpdate.model_validate({"penName": None})

    def test_changes_only_contain_supplied_fields(self):
        update = AuthorUpdate.model_validate({"firstName": "John"})

        assert update.changes() == {"first_name": "John"}
        assert update.changed_keys() == ["firstName"]

    def test_changed_keys_follow_declaration_order(self):
        update = AuthorUpdate.model_validate(
            {"firstName": "John", "penName": "Tolkien"}
        )

        assert update.changed_keys() == ["penName", "firstName"]


class TestBookSchemas:
    def test_create_minimal(self):
        book = BookCreate.model_validate({"title": "T", "author": 1})

        assert book.title == "T"
        assert book.author == 1
        assert book.isbn10 is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "", "author": 1},
            {"title": "T", "author": 0},
            {"title": "T", "author": 10_000_001},
            {"title": "T", "author": 1, "isbn10": 1_000_000_000},
            {"title": "T", "author": 1, "isbn13": 1_000_000_000_000},
            {"title": "T", "author": 1, "isbn10": 10_000_000_000},
            {"title": "T", "author": 1, "isbn13": 10**20},
            {"title": "T", "author": 1, "synopsis": "s" * 1001},
            {"title": "T", "author": 1, "synopsis": None},
            {"title": "T"},
        ],
    )
    def test_create_rejects_invalid(self, payload):
        with pytest.raises(ValidationError):
            BookCreate.model_validate(payload)

    def test_update_changes(self):
        update = BookUpdate.model_validate({"isbn13": 9780261103344, "title": "X"})

        assert update.changes() == {"title": "X", "isbn13": 9780261103344}
        assert update.changed_keys() == ["title", "isbn13"]

    def test_update_requires_a_field(self):
        with pytest.raises(ValidationError):
            BookUpdate.model_validate({})

    def test_read_serializes_camel_case(self):
        book = BookRead(id=1, title="T", author=2, pen_name="X")

        assert book.model_dump(by_alias=True)["penName"] == "X"


class TestBrowseParams:
    def test_defaults(self):
        params = AuthorBrowseParams()

        assert params.find is None
        assert params.sort == AuthorSort.PEN_NAME
        assert params.order == SortOrder.ASC
        assert params.page == 1
        assert params.perpage == 10

    def test_sort_and_order_are_case_insensitive(self):
        params = AuthorBrowseParams.model_validate(
            {"sort": "LASTNAME", "order": "DeSc"}
        )

        assert params.sort == AuthorSort.LAST_NAME
        assert params.order == SortOrder.DESC

    def test_unknown_sort_lists_allowed_values(self):
        with pytest.raises(ValidationError) as exc_info:
            BookBrowseParams.model_validate({"sort": "synopsis"})

        assert "title, isbn10, isbn13, author" in str(exc_info.value)

    def test_empty_find_means_no_filter(self):
        assert BookBrowseParams.model_validate({"find": ""}).find is None

    @pytest.mark.parametrize(
        "query",
        [
            {"page": 0},
            {"page": 100_001},
            {"perpage": 0},
            {"perpage": 101},
            {"find": "x" * 101},
            {"unknown": "1"},
        ],
    )
    def test_rejects_out_of_range(self, query):
        with pytest.raises(ValidationError):
            BookBrowseParams.model_validate(query)

    def test_book_sort_default(self):
        assert BookBrowseParams().sort == BookSort.TITLE


def test_author_read_from_model():
    from bookshelf.models.author import Author

    read = AuthorRead.model_validate(Author(id=3, pen_name="Tolkien"))

    assert read.model_dump(by_alias=True) == {
        "id": 3,
        "penName": "Tolkien",
        "lastName": None,
        "firstName": None,
    }
