from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

T = TypeVar("T")


class MetadataModel(BaseModel):  # type: ignore[misc]
    page: Annotated[int, Field(ge=1)]
    per_page: Annotated[int, Field(ge=1)]
    total: Annotated[int, Field(ge=0)]
    pages: Annotated[int, Field(ge=1)]


class PageModel(BaseModel, Generic[T]):  # type: ignore[misc]
    """Body of a browse response."""

    page: Annotated[int, Field(ge=1)]
    pages: Annotated[int, Field(ge=1)]
    items: list[T]


class CamelModel(BaseModel):  # type: ignore[misc]
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayloadResponse(CamelModel, Generic[T]):
    """Body of a read response."""

    payload: T
    status_code: int = 200


class EditResponse(CamelModel):
    message: str = "Edit Success"
    keys: list[str]
    status_code: int = 200


class AddResponse(CamelModel):
    message: str = "Add Success"
    id: int
    status_code: int = 201


def page_of(items: list[Any], meta: MetadataModel) -> PageModel[Any]:
    """Build a browse body from fetched items and pagination metadata."""
    return PageModel(page=meta.page, pages=meta.pages, items=items)
