from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, ClassVar, Generic, TypeVar
from pydantic import BaseModel, ConfigDict, PositiveInt, field_serializer

T = TypeVar("T")

# Numeric fields stay int for integral values and float otherwise.
Number = int | float


def json_number(value: Number) -> Number | str:
    """JSON has no infinity literal; ?page=Infinity is written as "Infinity"."""
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


# Fallback values used when page/limit are absent or invalid
class PaginationDefaults(BaseModel):
    page: PositiveInt = 1
    limit: PositiveInt = 12

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


# Normalized page descriptor
class PaginationResult(BaseModel):
    page: Number
    limit: Number
    skip: Number

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_serializer("page", "limit", "skip", when_used="json")
    def serialize_number(self, value: Number) -> Number | str:
        return json_number(value)


# Body of POST /pagination/normalize
class NormalizeRequest(BaseModel):
    query: dict[str, Any] = {}
    defaults: PaginationDefaults | None = None


class Page(BaseModel, Generic[T]):
    """Paged list envelope returned by list endpoints."""
    page: Number
    limit: Number
    total: int
    items: list[T]

    @field_serializer("page", "limit", when_used="json")
    def serialize_number(self, value: Number) -> Number | str:
        return json_number(value)

    @classmethod
    def build(
        cls, items: Sequence[T], total: int, pagination: PaginationResult
    ) -> Page[T]:
        return cls(
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            items=list(items),
        )
