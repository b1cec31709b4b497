"""
Pytest configuration and fixtures for testing.

Provides repository mocks, an HTTP client whose repositories are replaced
through ``app.dependency_overrides``, and an in-memory SQLite database for
end-to-end tests.
"""

import os

import pytest

# Database credentials must be set before importing bookshelf modules
os.environ.setdefault("DB_USER", "test-user")
os.environ.setdefault("DB_PASSWORD", "test-password")

from fastapi.testclient import TestClient  # noqa: E402

from tests.mocks.repository_mocks import (  # noqa: E402
    create_mock_author_repository,
    create_mock_book_repository,
)


@pytest.fixture
def author_repo():
    """Mocked AuthorRepository."""
    return create_mock_author_repository()


@pytest.fixture
def book_repo():
    """Mocked BookRepository."""
    return create_mock_book_repository()


@pytest.fixture
def app():
    """The application with dependency overrides cleared after each test."""
    from bookshelf import app as bookshelf_app

    yield bookshelf_app
    bookshelf_app.dependency_overrides.clear()


@pytest.fixture
def client(app, author_repo, book_repo):
    """
    Test client whose repositories are mocks.

    The client is not used as a context manager, so the lifespan (database
    wait and table creation) does not run.
    """
    from bookshelf.dependencies import get_author_repository, get_book_repository

    app.dependency_overrides[get_author_repository] = lambda: author_repo
    app.dependency_overrides[get_book_repository] = lambda: book_repo
    return TestClient(app)
