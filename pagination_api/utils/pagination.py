"""
Normalization of raw `page` / `limit` query values.

Values are coerced loosely: missing, zero, empty and non-numeric input all
count as absent and fall back to the defaults, while negative numbers are
kept and clamped. The result always satisfies page >= 1, 1 <= limit <= 100
and skip == (page - 1) * limit.
"""
from __future__ import annotations

import math
import re
from collections.abc import Mapping
from decimal import Decimal
from numbers import Real
from typing import Any, Final

from pagination_api.schemas.pagination import (
    Number,
    PaginationDefaults,
    PaginationResult,
)

MIN_PAGE: Final[int] = 1
MIN_LIMIT: Final[int] = 1
MAX_LIMIT: Final[int] = 100

DEFAULT_PAGINATION: Final[PaginationDefaults] = PaginationDefaults(page=1, limit=12)

NAN: Final[float] = float("nan")

_DECIMAL_RE: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)
_PREFIXED_RE: Final[re.Pattern[str]] = re.compile(
    r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII
)
_INFINITY: Final[dict[str, float]] = {
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}


def _tidy(value: float) -> Number:
    # 2.0 and 2 must produce identical results
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def _parse_string(text: str) -> Number:
    text = text.strip()
    if not text:
        return 0
    if text in _INFINITY:
        return _INFINITY[text]
    if _PREFIXED_RE.fullmatch(text):
        return int(text, 0)
    if _DECIMAL_RE.fullmatch(text):
        return _tidy(float(text))
    return NAN


def _coerce_element(element: Any) -> Number:
    # A lone sequence element is read through its text form: None is the
    # empty string, booleans spell "true"/"false" and so are not numbers.
    if element is None:
        return 0
    if isinstance(element, bool):
        return NAN
    return coerce_number(element)


def coerce_number(value: Any) -> Number:
    """
    Loosely convert an untyped query value to a number.

    Returns NaN for anything that does not read as a number. Empty strings,
    empty sequences and None come back as 0.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _tidy(value)
    if isinstance(value, (Real, Decimal)):
        try:
            return _tidy(float(value))
        except (OverflowError, ValueError):
            return NAN
    if isinstance(value, bytes):
        try:
            return _parse_string(value.decode("utf-8"))
        except UnicodeDecodeError:
            return NAN
    if isinstance(value, str):
        return _parse_string(value)
    if isinstance(value, (list, tuple)):
        # Repeated query keys arrive as a sequence
        if not value:
            return 0
        if len(value) == 1:
            return _coerce_element(value[0])
        return NAN
    return NAN


def is_absent(value: Number) -> bool:
    """True when a coerced value must be replaced by its default (0 or NaN)."""
    return value == 0 or (isinstance(value, float) and math.isnan(value))


def _resolve_defaults(
    defaults: PaginationDefaults | Mapping[str, Any] | None,
) -> PaginationDefaults:
    if defaults is None:
        return DEFAULT_PAGINATION
    if isinstance(defaults, PaginationDefaults):
        return defaults
    return PaginationDefaults.model_validate(dict(defaults))


def normalize(
    query: Mapping[str, Any],
    defaults: PaginationDefaults | Mapping[str, Any] | None = None,
) -> PaginationResult:
    """
    Turn raw query values into a bounded page descriptor.

    Only the `page` and `limit` keys of `query` are read. `defaults` falls
    back to page 1, limit 12 when omitted.
    """
    fallback = _resolve_defaults(defaults)

    page: Number = coerce_number(query.get("page"))
    if is_absent(page):
        page = fallback.page
    page = max(MIN_PAGE, page)

    limit: Number = coerce_number(query.get("limit"))
    if is_absent(limit):
        limit = fallback.limit
    limit = min(MAX_LIMIT, max(MIN_LIMIT, limit))

    skip: Number = (page - 1) * limit
    if isinstance(skip, float):
        skip = _tidy(skip)
    return PaginationResult(page=page, limit=limit, skip=skip)
