"""
Request and response schemas for authors.

JSON uses camelCase keys (``penName``); Python attributes are snake_case.
"""

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
    PEN_NAME_MAX_LENGTH,
    PEN_NAME_MIN_LENGTH,
    PERSON_NAME_MAX_LENGTH,
    PERSON_NAME_MIN_LENGTH,
)
from bookshelf.schemas.errors import missing_fields_error

PenName = Annotated[
    str,
    Field(min_length=PEN_NAME_MIN_LENGTH, max_length=PEN_NAME_MAX_LENGTH),
]
PersonName = Annotated[
    str,
    Field(
        min_length=PERSON_NAME_MIN_LENGTH, max_length=PERSON_NAME_MAX_LENGTH
    ),
]


class AuthorBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class AuthorCreate(AuthorBase):
    """Payload for POST /authors."""

    pen_name: PenName
    last_name: PersonName | None = None
    first_name: PersonName | None = None

    @field_validator("last_name", "first_name", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class AuthorUpdate(AuthorBase):
    """
    Payload for PATCH /authors/{id}.

    Every field is optional but at least one must be supplied. Only the
    supplied fields are written.
    """

    pen_name: PenName | None = None
    last_name: PersonName | None = None
    first_name: PersonName | None = None

    @field_validator("pen_name", "last_name", "first_name", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @model_validator(mode="after")
    def require_one_field(self) -> "AuthorUpdate":
        if not self.model_fields_set:
            raise missing_fields_error(type(self))
        return self

    def changes(self) -> dict[str, str]:
        """Supplied fields keyed by attribute name."""
        return self.model_dump(include=self.model_fields_set)

    def changed_keys(self) -> list[str]:
        """Supplied fields keyed by their JSON name, in declaration order."""
        return [
            to_camel(name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        ]


class AuthorRead(BaseModel):
    """Author as returned by read and browse."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    pen_name: str
    last_name: str | None = None
    first_name: str | None = None
