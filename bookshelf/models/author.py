from sqlmodel import Field

from bookshelf.constants import PEN_NAME_MAX_LENGTH, PERSON_NAME_MAX_LENGTH
from bookshelf.models.base import BaseModel


class Author(BaseModel, table=True):
    """
    SQLModel representing an author row.

    This is a plain data model; all queries live in AuthorRepository.

    Attributes:
        id: Primary key identifier for the author
        pen_name: Required display name
        last_name: Optional family name
        first_name: Optional given name
    """

    __tablename__ = "authors"
    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    pen_name: str = Field(max_length=PEN_NAME_MAX_LENGTH)
    last_name: str | None = Field(default=None, max_length=PERSON_NAME_MAX_LENGTH)
    first_name: str | None = Field(
        default=None, max_length=PERSON_NAME_MAX_LENGTH
    )
