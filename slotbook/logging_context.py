"""Request ID logging context for tracing booking writes.

Every write the booking service performs runs inside ``request_scope()``,
which binds a fresh ``REQ-xxxxxxxx`` id for the duration of that write and
restores the previous one afterwards. ``RequestIdFilter`` copies the bound id
onto each log record so ``REQUEST_LOG_FORMAT`` can print it; records emitted
outside any scope show ``-``.

Usage:
    from slotbook.logging_context import get_request_logger, request_scope

    logger = get_request_logger(__name__)
    with request_scope() as request_id:
        logger.info("Committing booking")  # ... [REQ-1a2b3c4d] Committing booking
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterable, Iterator, Optional

NO_REQUEST_ID = "-"

REQUEST_LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def generate_request_id() -> str:
    return f"REQ-{uuid.uuid4().hex[:8]}"


def get_request_id() -> str:
    """The id bound to the current task, or ``NO_REQUEST_ID``."""
    return _request_id.get()


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind ``request_id`` (or a generated one) until the block exits."""
    token = _request_id.set(request_id or generate_request_id())
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps the current request id on records that lack one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def install_request_filter(handlers: Iterable[logging.Handler]) -> None:
    """Attach a RequestIdFilter to each handler that does not have one yet.

    Handler-level filters see records from every logger, so a format that
    references ``%(request_id)s`` never fails on third-party records.
    """
    for handler in handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())


def get_request_logger(name: str) -> logging.Logger:
    """Return a logger whose records carry ``request_id``."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
