"""
Access Log for Shortening and Redirect Requests

Every request under /api/shorturl produces one line on the `shorturl.access`
logger naming what happened to it:

    POST /api/shorturl 200 outcome=shortened code=17 4.10ms
    GET /api/shorturl/99 200 outcome=not_found code=99 1.02ms

Both endpoints answer most failures with a 200, so the status code alone
cannot tell a redirect from a rejected URL. Endpoints call record_outcome()
and the middleware reads the result back from request.state once the
response is ready. Other routes (health, docs) are logged at DEBUG.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

ACCESS_LOGGER = "shorturl.access"
SHORTURL_PATH = "/api/shorturl"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Outcomes recorded by the endpoints
SHORTENED = "shortened"
INVALID_URL = "invalid_url"
REDIRECTED = "redirected"
NOT_FOUND = "not_found"
STORAGE_ERROR = "storage_error"

access_logger = logging.getLogger(ACCESS_LOGGER)


def configure_logging(level: str = "INFO", access_log: bool = True) -> None:
    """
    Configure root logging and the access logger.

    The access logger always emits at INFO so outcome lines survive a
    quieter root level such as WARNING; `access_log=False` silences it.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    access_logger.setLevel(logging.INFO)
    access_logger.disabled = not access_log


def record_outcome(request: Request, outcome: str, short_code: Optional[object] = None) -> None:
    """Attach the outcome of a shortening or redirect request for the access log."""
    request.state.outcome = outcome
    request.state.short_code = short_code


class ShortURLAccessLog(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        line = f"{request.method} {request.url.path} {response.status_code}"
        if not request.url.path.startswith(SHORTURL_PATH):
            access_logger.debug(f"{line} {elapsed_ms:.2f}ms")
            return response

        outcome = getattr(request.state, "outcome", None) or "unhandled"
        short_code = getattr(request.state, "short_code", None)
        if short_code is not None:
            line += f" outcome={outcome} code={short_code}"
        else:
            line += f" outcome={outcome}"

        level = logging.WARNING if outcome in (STORAGE_ERROR, "unhandled") else logging.INFO
        access_logger.log(level, f"{line} {elapsed_ms:.2f}ms")
        return response


def add_access_log(app: FastAPI) -> None:
    app.add_middleware(ShortURLAccessLog)
