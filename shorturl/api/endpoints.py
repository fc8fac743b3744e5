"""
FastAPI Endpoints for URL Shortener Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Reading the request
- Mapping service exceptions to the public response contract
- Delegating to service layer

Response contract:
- Validation failures answer 200 {"error": "invalid url"}
- Unknown codes answer 200 {"error": "Short URL not found"}
- Persistence failures are logged; details never reach the client
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from shorturl.api.schemas import ErrorResponse, ShortenResponse
from shorturl.core.exceptions import InvalidURLError, PersistenceError, ShortCodeNotFoundError
from shorturl.core.validators import URLValidator
from shorturl.db.session import get_session
from shorturl.middleware import logging as access
from shorturl.services.redirect_service import RedirectService
from shorturl.services.url_service import URLShorteningService

logger = logging.getLogger(__name__)

INVALID_URL = "invalid url"
NOT_FOUND = "Short URL not found"

router = APIRouter(prefix="/api/shorturl")


def get_url_validator() -> URLValidator:
    """Dependency providing the URL validator (overridable in tests)."""
    return URLValidator()


async def read_submitted_url(request: Request) -> Optional[object]:
    """
    Extract the `url` field from a JSON or form-encoded body.

    A body that cannot be parsed counts as a missing field.

    Returns:
        The submitted value (not necessarily a string), or None if absent
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            return None
        return payload.get("url") if isinstance(payload, dict) else None

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        logger.info(f"Unreadable form body: {e}")
        return None
    return form.get("url")


@router.post(
    "",
    response_model=Union[ShortenResponse, ErrorResponse],
    summary="Create a short URL",
    description="Takes a long URL and returns its numeric short code, reusing an existing one"
)
async def create_short_url(
    request: Request,
    session: AsyncSession = Depends(get_session),
    validator: URLValidator = Depends(get_url_validator)
) -> Union[ShortenResponse, ErrorResponse, Response]:
    """
    Create (or return the existing) short URL for a long URL.

    Returns:
        ShortenResponse with original_url and short_url
    """
    submitted_url = await read_submitted_url(request)

    try:
        url_service = URLShorteningService(session, validator=validator)
        link = await url_service.shorten(submitted_url)

    except InvalidURLError as e:
        logger.info(f"Rejected URL: {e}")
        access.record_outcome(request, access.INVALID_URL)
        return ErrorResponse(error=INVALID_URL)
    except PersistenceError as e:
        logger.error(f"Error saving URL: {e}", exc_info=True)
        access.record_outcome(request, access.STORAGE_ERROR)
        return PlainTextResponse(
            "Error creating shortened URL",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    access.record_outcome(request, access.SHORTENED, link.short_code)
    return ShortenResponse(original_url=link.original_url, short_url=link.short_code)


@router.get(
    "/{short_code}",
    response_model=None,
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL"
)
async def redirect_to_url(
    short_code: str,
    request: Request,
    session: AsyncSession = Depends(get_session)
) -> Response:
    """
    Redirect to the original URL for a given short code.

    Returns:
        RedirectResponse (HTTP 302) to original URL, or a 200 JSON error
    """
    try:
        link = await RedirectService(session).resolve(short_code)

    except ShortCodeNotFoundError:
        access.record_outcome(request, access.NOT_FOUND, short_code)
        return JSONResponse({"error": NOT_FOUND})
    except PersistenceError as e:
        logger.error(f"Error fetching short_url {short_code}: {e}", exc_info=True)
        access.record_outcome(request, access.STORAGE_ERROR, short_code)
        return JSONResponse({"error": INVALID_URL})

    access.record_outcome(request, access.REDIRECTED, link.short_code)
    return RedirectResponse(
        url=link.original_url,
        status_code=status.HTTP_302_FOUND
    )
