"""Tests for the pagination helpers in bookshelf.storage.db."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel import func, select

from bookshelf.models.author import Author
from bookshelf.storage.db import clamp_page, count_pages, get_paginated_results


@pytest.mark.parametrize(
    "total, per_page, expected",
    [(0, 10, 1), (1, 10, 1), (10, 10, 1), (11, 10, 2), (250, 100, 3)],
)
def test_count_pages(total, per_page, expected):
    assert count_pages(total, per_page) == expected


@pytest.mark.parametrize(
    "page, pages, expected",
    [(1, 1, 1), (5, 3, 3), (2, 3, 2), (0, 3, 1)],
)
def test_clamp_page(page, pages, expected):
    assert clamp_page(page, pages) == expected


def make_session(total: int, rows: list):
    count_result = MagicMock()
    count_result.one.return_value = total
    rows_result = MagicMock()
    rows_result.all.return_value = rows
    session = MagicMock()
    session.exec = AsyncMock(side_effect=[count_result, rows_result])
    return session


@pytest.mark.asyncio
async def test_get_paginated_results_offsets_clamped_page():
    session = make_session(45, ["a", "b"])

    items, meta = await get_paginated_results(
        session,
        select(Author),
        select(func.count(Author.id)),
        page=100,
        per_page=20,
    )

    assert items == ["a", "b"]
    assert meta.page == 3
    assert meta.pages == 3
    assert meta.total == 45
    page_query = session.exec.call_args_list[1].args[0]
    assert page_query._offset == 40
    assert page_query._limit == 20


@pytest.mark.asyncio
async def test_get_paginated_results_empty_table_has_one_page():
    session = make_session(0, [])

    items, meta = await get_paginated_results(
        session, select(Author), select(func.count(Author.id)), page=4
    )

    assert items == []
    assert meta.page == 1
    assert meta.pages == 1
    assert meta.per_page == 10
