from sqlalchemy import BigInteger
from sqlmodel import Field

from bookshelf.constants import SYNOPSIS_MAX_LENGTH, TITLE_MAX_LENGTH
from bookshelf.models.base import BaseModel


class Book(BaseModel, table=True):
    """
    SQLModel representing a book row.

    ``author`` holds the id of the owning author. It is not a foreign key;
    book commands check the reference before every write.
    """

    __tablename__ = "books"
    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    synopsis: str | None = Field(default=None, max_length=SYNOPSIS_MAX_LENGTH)
    isbn10: int | None = Field(default=None, sa_type=BigInteger)
    isbn13: int | None = Field(default=None, sa_type=BigInteger)
    author: int = Field(index=True)
