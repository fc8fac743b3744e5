"""
Input Validators

This module provides validation for the two user inputs the service accepts:
- URLs submitted for shortening (syntax, scheme and hostname resolution)
- Short codes submitted for resolution (decimal integers only)

Design Decisions:
- Scheme is checked before any network activity, so `ftp://...` never
  triggers a DNS lookup
- The DNS lookup uses the event loop's resolver and is bounded by a timeout
- Syntax errors, rejected schemes and lookup failures all raise the same
  InvalidURLError; callers never need to tell them apart
- The resolver is injectable so tests can run without network access
"""

import asyncio
import logging
import re
import socket
from typing import Awaitable, Callable, Optional
from urllib.parse import urlsplit

from shorturl.core.exceptions import InvalidURLError
from shorturl.core.setting import settings

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})

# Short codes are stored as signed 64-bit integers
MAX_SHORT_CODE = 2**63 - 1
SHORT_CODE_PATTERN = re.compile(r"[0-9]{1,19}")

HostResolver = Callable[[str], Awaitable[str]]


def parse_short_code(short_code) -> Optional[int]:
    """
    Parse a short code taken from the request path.

    Only plain ASCII decimal digits are accepted. Signs, whitespace,
    fractions and values beyond the 64-bit range are rejected, since no
    such code is ever issued.

    Args:
        short_code: The raw path segment

    Returns:
        The integer code if well-formed, None otherwise
    """
    if not isinstance(short_code, str):
        return None

    if not SHORT_CODE_PATTERN.fullmatch(short_code):
        return None

    value = int(short_code)
    if value > MAX_SHORT_CODE:
        return None

    return value


def validate_url_length(url: str, max_length: int = 2048) -> bool:
    """
    Validate URL length, measured in UTF-8 bytes.

    original_url carries a unique B-tree index, and index entries are
    bounded in bytes (about 2704 on PostgreSQL), so a multibyte URL must
    be measured as stored rather than by character count.

    Args:
        url: The URL to validate
        max_length: Maximum allowed size in bytes (default: 2048)

    Returns:
        True if URL length is valid, False otherwise (including strings
        that cannot be encoded, such as lone surrogates)
    """
    if not url:
        return False
    try:
        return len(url.encode("utf-8")) <= max_length
    except UnicodeEncodeError:
        return False


async def resolve_hostname(hostname: str) -> str:
    """Resolve a hostname and return the first address found."""
    loop = asyncio.get_running_loop()
    addresses = await loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
    return addresses[0][4][0]


class URLValidator:
    """
    Validates URLs submitted for shortening.

    A URL is accepted when it parses, uses http or https, names a host and
    that host resolves. Each call performs at most one DNS lookup and never
    retries.
    """

    def __init__(
        self,
        resolver: HostResolver = resolve_hostname,
        lookup_timeout: Optional[float] = None,
        max_length: Optional[int] = None
    ):
        """
        Initialize the validator.

        Args:
            resolver: Coroutine function mapping a hostname to an address;
                raises OSError when the name does not resolve
            lookup_timeout: Seconds allowed for the lookup (default: settings)
            max_length: Largest accepted URL in UTF-8 bytes (default: settings)
        """
        self.resolver = resolver
        self.lookup_timeout = lookup_timeout or settings.DNS_LOOKUP_TIMEOUT
        self.max_length = max_length or settings.MAX_URL_LENGTH

    async def validate(self, url) -> str:
        """
        Validate a URL.

        Args:
            url: The raw value submitted by the client

        Returns:
            The hostname that was resolved

        Raises:
            InvalidURLError: If the URL is malformed, uses another scheme,
                or its hostname cannot be resolved in time
        """
        if not isinstance(url, str) or not validate_url_length(url, self.max_length):
            raise InvalidURLError(url, reason="Missing or oversized URL")

        try:
            parts = urlsplit(url)
            parts.port  # raises ValueError on a malformed port
        except ValueError as e:
            logger.info(f"Invalid URL format: {url}")
            raise InvalidURLError(url, reason="Invalid URL format") from e

        if parts.scheme not in ALLOWED_SCHEMES:
            logger.info(f"Invalid protocol detected: {parts.scheme or '<none>'}")
            raise InvalidURLError(url, reason="URL must use http:// or https://")

        hostname = parts.hostname
        if not hostname:
            logger.info(f"URL has no hostname: {url}")
            raise InvalidURLError(url, reason="URL must have a hostname")

        try:
            address = await asyncio.wait_for(
                self.resolver(hostname),
                timeout=self.lookup_timeout
            )
        except (OSError, UnicodeError, asyncio.TimeoutError) as e:
            logger.info(f"DNS lookup failed for hostname: {hostname}")
            raise InvalidURLError(url, reason="Hostname could not be resolved") from e

        logger.debug(f"DNS lookup successful for {hostname}: {address}")
        return hostname
