from typing import Annotated, Any
from fastapi import Depends, Request

from pagination_api.core.config import Settings, get_settings
from pagination_api.schemas.pagination import PaginationResult
from pagination_api.utils.pagination import normalize


def raw_query(request: Request) -> dict[str, Any]:
    """
    Flatten the query string, keeping repeated keys as lists
    (?page=1&page=2 -> {"page": ["1", "2"]}).
    """
    params = request.query_params
    flat: dict[str, Any] = {}
    for key in params.keys():
        values = params.getlist(key)
        flat[key] = values[0] if len(values) == 1 else values
    return flat


# Read page/limit straight from the query string so malformed values are
# normalized instead of rejected with a 422.
def get_pagination(
    query: Annotated[dict[str, Any], Depends(raw_query)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PaginationResult:
    return normalize(query, settings.pagination_defaults())


Pagination = Annotated[PaginationResult, Depends(get_pagination)]
