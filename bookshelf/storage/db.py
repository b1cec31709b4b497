import asyncio
import math
from typing import Any, AsyncIterator

from sqlalchemy import Select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
)
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import bookshelf.models  # noqa: F401  registers tables on SQLModel.metadata
from bookshelf.constants import MAX_PAGE_SIZE
from bookshelf.logging import logger
from bookshelf.schemas.response import MetadataModel
from bookshelf.settings import app_settings

engine: AsyncEngine = create_async_engine(
    app_settings.DATABASE_URL,
    echo=False,
    pool_size=app_settings.DB_POOL_SIZE,
    max_overflow=app_settings.DB_MAX_OVERFLOW,
    pool_recycle=app_settings.DB_POOL_RECYCLE,
    pool_pre_ping=app_settings.DB_POOL_PRE_PING,
)
async_session = sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def wait_and_init_db(
    retry_interval: int | None = None,
    max_retries: int | None = None,
    db_engine: AsyncEngine | None = None,
) -> None:
    """
    Wait until the database is available and create missing tables.

    Args:
        retry_interval: Time in seconds between retries.
            Defaults to app_settings.DB_INIT_RETRY_INTERVAL
        max_retries: Maximum number of retries before giving up.
            Defaults to app_settings.DB_INIT_MAX_RETRIES
        db_engine: Engine to initialize. Defaults to the module engine.

    Raises:
        RuntimeError: If the database stays unreachable.
    """
    if retry_interval is None:
        retry_interval = app_settings.DB_INIT_RETRY_INTERVAL
    if max_retries is None:
        max_retries = app_settings.DB_INIT_MAX_RETRIES
    if db_engine is None:
        db_engine = engine
    for attempt in range(max_retries):
        try:
            async with db_engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database is now ready.")
            return
        except (OperationalError, OSError):
            logger.warning(
                f"Database not ready, retrying in {retry_interval} seconds... (Attempt {attempt + 1}/{max_retries})"
            )
            await asyncio.sleep(retry_interval)

    logger.error("Failed to connect to the database after multiple attempts.")
    raise RuntimeError("Database connection could not be established.")


async def get_session() -> AsyncIterator[AsyncSession]:
    """
    Get an asynchronous session from the SQLAlchemy session factory.

    The session is committed when the request succeeds, rolled back when
    it fails, and always returned to the pool.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as ex:
            await session.rollback()
            logger.error(f"Database integrity error: {ex}")
            raise
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise


def count_pages(total: int, per_page: int) -> int:
    """
    Number of pages needed for ``total`` rows, never less than one.

    Example:
        >>> count_pages(0, 10)
        1
        >>> count_pages(21, 10)
        3
    """
    return max(1, math.ceil(total / per_page))


def clamp_page(page: int, pages: int) -> int:
    """Clamp a requested page into ``1..pages``."""
    return max(1, min(page, pages))


async def get_paginated_results(
    session: AsyncSession,
    query: Select[Any],
    count_query: Select[Any],
    page: int = 1,
    per_page: int | None = None,
) -> tuple[list[Any], MetadataModel]:
    """
    Run a count query then fetch one page of ``query``.

    Both queries run on the caller's session, so a browse request uses a
    single pooled connection. The requested page is clamped to the number
    of available pages.

    Args:
        session: Session bound to the current request.
        query: Filtered and ordered SELECT returning the items.
        count_query: SELECT COUNT(...) with the same filters as ``query``.
        page: Requested page number (1-indexed).
        per_page: Page size. Defaults to app_settings.DEFAULT_PAGE_SIZE,
            capped at MAX_PAGE_SIZE.

    Returns:
        Tuple of (items, metadata).

    Raises:
        SQLAlchemyError: If either query fails.
    """
    if per_page is None:
        per_page = app_settings.DEFAULT_PAGE_SIZE
    per_page = min(per_page, MAX_PAGE_SIZE)

    total_result = await session.exec(count_query)
    total = total_result.one()

    pages = count_pages(total, per_page)
    page = clamp_page(page, pages)

    meta = MetadataModel(page=page, per_page=per_page, total=total, pages=pages)

    results = await session.exec(
        query.offset((page - 1) * per_page).limit(per_page)
    )
    return list(results.all()), meta
