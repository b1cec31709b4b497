# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bookshelf.logging import logger
from bookshelf.middlewares.correlation_id import CorrelationIDMiddleware
from bookshelf.middlewares.logging_context import LoggingContextMiddleware
from bookshelf.middlewares.prometheus import PrometheusMiddleware
from bookshelf.routing import collect_subrouters
from bookshelf.settings import app_settings
from bookshelf.storage.db import engine, wait_and_init_db
from bookshelf.utils.error_handler import register_exception_handlers
from bookshelf.utils.metrics import app_info

__version__ = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup and shutdown.

    Startup waits for the database and creates missing tables. Shutdown
    disposes of the connection pool.
    """
    logger.info("Application startup: initializing resources")

    await wait_and_init_db()
    logger.info("Initialized database and tables")

    app_info.labels(
        version=__version__,
        python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        environment=app_settings.ENVIRONMENT,
    ).set(1)

    yield  # Application runs here

    logger.info("Application shutdown: cleaning up resources")
    await engine.dispose()
    logger.info("Application shutdown complete")


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    Includes the routers collected by ``collect_subrouters()``, the error
    handlers from ``register_exception_handlers()`` and the middlewares:
    - `CorrelationIDMiddleware`: request correlation IDs.
    - `LoggingContextMiddleware`: per-request log context and access log.
    - `PrometheusMiddleware`: request metrics.
    """
    app = FastAPI(
        title="Bookshelf",
        description="Authors and books REST API",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(collect_subrouters())
    register_exception_handlers(app)

    # Middlewares (execute in REVERSE order of registration)
    # Execution flow: CorrelationIDMiddleware → LoggingContextMiddleware → PrometheusMiddleware
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    return app


app = application()  # Need for fastapi cli
