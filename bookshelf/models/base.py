"""
Base model for all database tables with async attribute support.

Combines SQLModel with SQLAlchemy's AsyncAttrs mixin so that attributes
can be awaited via ``awaitable_attrs`` inside async sessions.
"""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlmodel import SQLModel


class BaseModel(SQLModel, AsyncAttrs):  # type: ignore[misc]
    """
    Base model for all database tables.

    Example:
        class Author(BaseModel, table=True):
            __tablename__ = "authors"

            id: int | None = Field(default=None, primary_key=True)
            pen_name: str
    """

    pass
