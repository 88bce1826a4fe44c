"""Shared wire shapes: camelCase base model and the response envelope."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class WireModel(BaseModel):
    """Base for everything that crosses the API. camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ApiResponse(WireModel, Generic[T]):
    """Envelope around every response body."""

    data: T | None = None
    message: str | None = None
    status: str | None = None

