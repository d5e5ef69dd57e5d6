from fastapi import APIRouter, Request

from pagination_api.api.deps import Pagination
from pagination_api.core.logging import get_logger
from pagination_api.schemas.pagination import NormalizeRequest, PaginationResult
from pagination_api.utils.pagination import normalize

router = APIRouter(prefix="/pagination", tags=["pagination"])


@router.get("", response_model=PaginationResult)
def read_pagination(request: Request, pagination: Pagination):
    # Echo the normalized page/limit/skip for this request's query string
    logger = get_logger(__name__, request)
    logger.debug(
        "pagination page=%s limit=%s skip=%s",
        pagination.page,
        pagination.limit,
        pagination.skip,
    )
    return pagination


@router.post("/normalize", response_model=PaginationResult)
def normalize_pagination(data: NormalizeRequest):
    return normalize(data.query, data.defaults)
