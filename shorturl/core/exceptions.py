"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

Every exception carries an ``error_code`` so callers can tell failures
apart without parsing messages. The API layer maps them to responses:
- InvalidURLError -> {"error": "invalid url"}
- ShortCodeNotFoundError -> {"error": "Short URL not found"}
- PersistenceError (and subclasses) -> opaque 500
"""


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""

    error_code = "shorturl_error"


class InvalidURLError(URLShortenerException):
    """Raised when URL validation fails (syntax, scheme or DNS lookup)."""

    error_code = "invalid_url"

    def __init__(self, url, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class ShortCodeNotFoundError(URLShortenerException):
    """Raised when a short code does not resolve to a stored link."""

    error_code = "not_found"

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found")


class PersistenceError(URLShortenerException):
    """Raised when database operations fail."""

    error_code = "persistence_error"

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


class DuplicateShortCodeError(PersistenceError):
    """Raised when an insert collides with an existing short code."""

    error_code = "duplicate_code"

    def __init__(self, short_code: int, original_error: Exception = None):
        self.short_code = short_code
        super().__init__(f"short code {short_code} already exists", original_error)


class DuplicateOriginalURLError(PersistenceError):
    """Raised when an insert collides with an already shortened URL."""

    error_code = "duplicate_url"

    def __init__(self, original_url: str, original_error: Exception = None):
        self.original_url = original_url
        super().__init__(f"original URL already shortened: {original_url}", original_error)


class SequenceExhaustedError(PersistenceError):
    """Raised when a counter cannot be incremented without overflowing."""

    error_code = "sequence_exhausted"

    def __init__(self, counter_name: str):
        self.counter_name = counter_name
        super().__init__(f"counter '{counter_name}' reached its maximum value")
