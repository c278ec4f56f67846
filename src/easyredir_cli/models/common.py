"""Common request and response models."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """One field-level entry of an API error body."""

    resource: str = ""
    param: str = ""
    code: str = ""
    message: str = ""

    def __str__(self) -> str:
        location = ".".join(p for p in (self.resource, self.param) if p)
        text = f"{self.code}: {self.message}" if self.code else self.message
        return f"{location}: {text}" if location else text


class ErrorResponse(BaseModel):
    """Error body returned with a non-success status.

    Format: ``{"type", "message", "errors": [{"resource", "param", "code", "message"}]}``
    """

    type: str
    message: str = ""
    errors: list[ErrorDetail] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def null_errors(cls, v: object) -> object:
        return [] if v is None else v


class ListOptions(BaseModel):
    """Query options for list endpoints. Empty values are not sent."""

    model_config = ConfigDict(frozen=True)

    starting_after: str = ""
    ending_before: str = ""
    source_filter: str = ""
    target_filter: str = ""
    limit: int = Field(default=0, ge=0)


class Metadata(BaseModel):
    has_more: bool = False


class Links(BaseModel):
    next: str | None = None
    prev: str | None = None


class Page(BaseModel, Generic[T]):
    """One page of a list response.

    Format: ``{"data": [...], "meta": {"has_more"}, "links": {"next", "prev"}}``
    """

    data: list[T] = Field(default_factory=list)
    meta: Metadata = Field(default_factory=Metadata)
    links: Links = Field(default_factory=Links)

    @property
    def has_more(self) -> bool:
        return self.meta.has_more


class Collection(BaseModel, Generic[T]):
    """All records of a listing, concatenated across pages in fetch order.

    ``meta`` and ``links`` are those of the last page fetched.
    """

    data: list[T] = Field(default_factory=list)
    meta: Metadata = Field(default_factory=Metadata)
    links: Links = Field(default_factory=Links)


class Item(BaseModel, Generic[T]):
    """A single-resource response: ``{"data": {...}}``."""

    data: T
