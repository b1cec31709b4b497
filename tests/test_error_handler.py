"""
Tests for exception to HTTP response mapping.

Covers the exception classes' own rendering and the handlers registered on
a minimal application.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from bookshelf.exceptions import (
    DatabaseError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from bookshelf.schemas.errors import ErrorSource
from bookshelf.utils.error_handler import (
    register_exception_handlers,
    validation_error_response,
)


class TestExceptionRendering:
    def test_not_found(self):
        body = NotFoundError().to_http_response().to_content()

        assert body == {
            "error": "Not Found",
            "message": "Id does not exist",
            "validation": {"source": "params", "keys": ["id"]},
            "statusCode": 404,
        }

    def test_invalid_reference(self):
        body = InvalidReferenceError().to_http_response().to_content()

        assert body == {
            "error": "Bad Request",
            "message": "Author is invalid",
            "validation": {"source": "payload", "keys": ["author"]},
            "statusCode": 400,
        }

    def test_validation_error_without_source(self):
        body = ValidationError("bad").to_http_response().to_content()

        assert body == {"error": "Bad Request", "message": "bad", "statusCode": 400}

    def test_database_error_hides_cause(self):
        body = DatabaseError("connection refused").to_http_response().to_content()

        assert body == {
            "error": "Internal Server Error",
            "message": "An internal server error occurred",
            "statusCode": 500,
        }


class TestValidationErrorResponse:
    def test_groups_keys_of_first_source(self):
        errors = [
            {"loc": ("query", "perpage"), "msg": "too big"},
            {"loc": ("query", "page"), "msg": "too small"},
            {"loc": ("query", "perpage"), "msg": "again"},
            {"loc": ("path", "id"), "msg": "ignored"},
        ]

        error = validation_error_response(errors)

        assert error.status_code == 400
        assert error.validation.source == ErrorSource.QUERY
        assert error.validation.keys == ["perpage", "page"]
        assert "ignored" not in error.message

    def test_body_level_error_has_no_keys(self):
        error = validation_error_response(
            [{"loc": ("body",), "msg": "Value error, at least one field"}]
        )

        assert error.validation.source == ErrorSource.PAYLOAD
        assert error.validation.keys == []
        assert error.message == "Value error, at least one field"

    def test_body_level_error_lists_keys_from_context(self):
        error = validation_error_response(
            [
                {
                    "loc": ("body",),
                    "msg": "at least one of title, author is required",
                    "ctx": {"keys": ["title", "author"]},
                }
            ]
        )

        assert error.validation.keys == ["title", "author"]


@pytest.fixture
def client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFoundError()

    @app.get("/broken-db")
    async def broken_db():
        raise OperationalError("SELECT 1", {}, Exception("password=secret"))

    @app.get("/crash")
    async def crash():
        raise RuntimeError("boom")

    @app.get("/items/{id}")
    async def item(id: int):
        return {"id": id}

    return TestClient(app, raise_server_exceptions=False)


def test_app_exception_handler(client):
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json()["message"] == "Id does not exist"


def test_database_error_is_opaque(client):
    response = client.get("/broken-db")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal Server Error",
        "message": "An internal server error occurred",
        "statusCode": 500,
    }
    assert "secret" not in response.text


def test_unexpected_error_is_opaque(client):
    response = client.get("/crash")

    assert response.status_code == 500
    assert response.json()["message"] == "An internal server error occurred"


def test_path_validation_maps_to_params(client):
    response = client.get("/items/abc")

    assert response.status_code == 400
    assert response.json()["validation"] == {"source": "params", "keys": ["id"]}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Not Found",
        "message": "Not Found",
        "statusCode": 404,
    }
