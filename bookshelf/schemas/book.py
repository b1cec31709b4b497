"""Request and response schemas for books."""

from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from bookshelf.constants import (
    ISBN10_MAX,
    ISBN10_THRESHOLD,
    ISBN13_MAX,
    ISBN13_THRESHOLD,
    MAX_ID,
    SYNOPSIS_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)
from bookshelf.schemas.errors import missing_fields_error

Title = Annotated[
    str, Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
]
Synopsis = Annotated[str, Field(max_length=SYNOPSIS_MAX_LENGTH)]
Isbn10 = Annotated[int, Field(gt=ISBN10_THRESHOLD, le=ISBN10_MAX)]
Isbn13 = Annotated[int, Field(gt=ISBN13_THRESHOLD, le=ISBN13_MAX)]
AuthorRef = Annotated[int, Field(gt=0, le=MAX_ID)]


class BookBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class BookCreate(BookBase):
    """Payload for POST /books."""

    title: Title
    synopsis: Synopsis | None = None
    isbn10: Isbn10 | None = None
    isbn13: Isbn13 | None = None
    author: AuthorRef

    @field_validator("synopsis", "isbn10", "isbn13", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class BookUpdate(BookBase):
    """
    Payload for PATCH /books/{id}.

    At least one field must be supplied; only supplied fields are written.
    """

    title: Title | None = None
    synopsis: Synopsis | None = None
    isbn10: Isbn10 | None = None
    isbn13: Isbn13 | None = None
    author: AuthorRef | None = None

    @field_validator(
        "title", "synopsis", "isbn10", "isbn13", "author", mode="before"
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @model_validator(mode="after")
    def require_one_field(self) -> "BookUpdate":
        if not self.model_fields_set:
            raise missing_fields_error(type(self))
        return self

    def changes(self) -> dict[str, str | int]:
        return self.model_dump(include=self.model_fields_set)

    def changed_keys(self) -> list[str]:
        return [
            to_camel(name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        ]


class BookRead(BaseModel):
    """Book joined with the pen name of its author."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    title: str
    synopsis: str | None = None
    isbn10: int | None = None
    isbn13: int | None = None
    author: int
    pen_name: str
