import logging
import sys
from typing import Final
from logging import LoggerAdapter, LogRecord
from typing_extensions import override
from fastapi import Request

_LOG_FORMAT: Final[str] = (
    "%(asctime)s %(levelname)s %(name)s :: %(message)s [req=%(request_id)s]"
)


class RequestLogFilter(logging.Filter):
    """
    Ensures every record has a request_id key.
    """

    @override
    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


def resolve_level(level: int | str) -> int:
    """
    Accept either a logging constant or a level name such as "debug".
    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


# Server loggers that ship their own handlers
_SERVER_LOGGERS: Final[tuple[str, ...]] = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Send all records through one stdout handler on the root logger.
    Server loggers drop their own handlers and propagate to it, so each
    line is written once and carries a request_id.
    """
    numeric_level = resolve_level(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestLogFilter())
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(numeric_level)
    root.addHandler(handler)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.setLevel(numeric_level)
        server_logger.propagate = True


def get_logger(
    name: str,
    request: Request | None = None
) -> LoggerAdapter[logging.Logger]:
    """
    Attach request context (request_id).
    Usage: logger = get_logger(__name__, request)
    """
    extra: dict[str, str] = {}
    if request is not None:
        extra["request_id"] = getattr(request.state, "correlation_id", "-")
    return LoggerAdapter(logging.getLogger(name), extra)
