"""
Request ID middleware for FastAPI / Starlette.

Each request gets an id, taken from the incoming `X-Request-ID` header when it looks
sane, generated (UUID4) otherwise. The id is stored in the request-id contextvar for
the duration of the request, so every log line the repositories emit carries it, and
echoed back in the `X-Request-ID` response header.
"""

import re
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# Printable token, no whitespace: keeps client-supplied ids from forging log lines
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
