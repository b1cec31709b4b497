"""
Query parameter schemas for browse endpoints.

Used as FastAPI query models:

    @router.get("")
    async def browse(params: Annotated[AuthorBrowseParams, Query()]): ...

Sort keys and order are matched case-insensitively and normalized to their
canonical spelling.
"""

from enum import Enum
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

from bookshelf.constants import MAX_FIND_LENGTH, MAX_PAGE, MAX_PAGE_SIZE
from bookshelf.settings import app_settings


class CaseInsensitiveEnum(str, Enum):
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class SortOrder(CaseInsensitiveEnum):
    ASC = "asc"
    DESC = "desc"


class AuthorSort(CaseInsensitiveEnum):
    PEN_NAME = "penName"
    LAST_NAME = "lastName"
    FIRST_NAME = "firstName"


class BookSort(CaseInsensitiveEnum):
    TITLE = "title"
    ISBN10 = "isbn10"
    ISBN13 = "isbn13"
    AUTHOR = "author"


class BrowseParams(BaseModel):
    """
    Common browse parameters.

    Attributes:
        find: Free-text filter. Empty string is treated as absent.
        order: Sort direction.
        page: Requested page, clamped to the available pages on browse.
        perpage: Page size.
    """

    model_config = ConfigDict(extra="forbid")

    find: Annotated[str | None, Field(max_length=MAX_FIND_LENGTH)] = None
    order: SortOrder = SortOrder.ASC
    page: Annotated[int, Field(ge=1, le=MAX_PAGE)] = 1
    perpage: Annotated[int, Field(ge=1, le=MAX_PAGE_SIZE)] = (
        app_settings.DEFAULT_PAGE_SIZE
    )

    @field_validator("find", mode="before")
    @classmethod
    def empty_find_is_none(cls, value):
        if value == "":
            return None
        return value

    @field_validator("order", "sort", mode="before", check_fields=False)
    @classmethod
    def match_case_insensitively(cls, value, info: ValidationInfo):
        enum_type = cls.model_fields[info.field_name].annotation
        if isinstance(value, str):
            try:
                return enum_type(value)
            except ValueError:
                allowed = ", ".join(member.value for member in enum_type)
                raise ValueError(f"must be one of: {allowed}") from None
        return value


class AuthorBrowseParams(BrowseParams):
    sort: AuthorSort = AuthorSort.PEN_NAME


class BookBrowseParams(BrowseParams):
    sort: BookSort = BookSort.TITLE
