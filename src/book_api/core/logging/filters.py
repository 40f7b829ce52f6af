"""
Logging filters.

- RequestIdFilter: guarantees every LogRecord carries `request_id`, read from a
  contextvar set by `RequestIDMiddleware` (async-safe, survives `await`).
- RedactFilter: masks credential-like attributes passed through `extra={...}`, e.g.
  a database URL logged while diagnosing a connection failure.

Both filters return True; they annotate records and never drop them.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Set `record.request_id` to, in order of preference: an explicit
    `extra={"request_id": ...}`, the contextvar value, or the sentinel "-".
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "authorization", "database_url", "dsn"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
