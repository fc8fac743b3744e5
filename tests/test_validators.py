"""
Tests for URL and short code validation.
"""

import asyncio

import pytest

from shorturl.core.exceptions import InvalidURLError
from shorturl.core.validators import (
    MAX_SHORT_CODE,
    URLValidator,
    parse_short_code,
    validate_url_length,
)


class TestShortCodeParsing:
    """Test parse_short_code."""

    def test_decimal_codes(self):
        assert parse_short_code("0") == 0
        assert parse_short_code("1") == 1
        assert parse_short_code("999") == 999
        assert parse_short_code("007") == 7
        assert parse_short_code(str(MAX_SHORT_CODE)) == MAX_SHORT_CODE

    def test_malformed_codes(self):
        """Anything that is not plain decimal digits is rejected."""
        malformed = [
            "",
            "abc",
            "12abc",
            "-1",
            "+1",
            "1.5",
            " 1",
            "1\n",
            "١٢",  # non-ASCII digits
            str(MAX_SHORT_CODE + 1),
            "1" * 20,
            None,
            12,
        ]
        for code in malformed:
            assert parse_short_code(code) is None, f"Should be rejected: {code!r}"


class TestURLLength:

    def test_validate_url_length(self):
        assert validate_url_length("http://example.com")
        assert validate_url_length("x" * 2048)
        assert not validate_url_length("x" * 2049)
        assert not validate_url_length("")

    def test_length_counts_utf8_bytes(self):
        """A multibyte URL under the character cap can still exceed the byte cap."""
        url = "http://example.com/" + "漢" * 1000

        assert len(url) < 2048
        assert len(url.encode("utf-8")) > 2048
        assert not validate_url_length(url)
        assert validate_url_length("http://example.com/" + "漢" * 600)

    def test_unencodable_text_rejected(self):
        assert not validate_url_length("http://example.com/\ud800")


class TestURLValidator:
    """Test URLValidator with a fake resolver."""

    @pytest.mark.asyncio
    async def test_valid_urls(self, validator, resolver):
        valid_urls = [
            "http://example.com",
            "https://www.example.com",
            "https://www.example.com/path/to/page",
            "http://subdomain.example.com:8080/path?query=value",
            "HTTPS://Example.COM/Case",
        ]
        for url in valid_urls:
            await validator.validate(url)

        assert resolver.calls == [
            "example.com",
            "www.example.com",
            "www.example.com",
            "subdomain.example.com",
            "example.com",
        ]

    @pytest.mark.asyncio
    async def test_returns_hostname(self, validator):
        assert await validator.validate("https://user@www.example.com:443/x") == "www.example.com"

    @pytest.mark.asyncio
    async def test_invalid_urls_skip_dns(self, validator, resolver):
        """Malformed input and other schemes are rejected before any lookup."""
        invalid_urls = [
            "not-a-url",
            "ftp://example.com",
            "javascript:alert(1)",
            "example.com",
            "",
            "http://",
            "http://example.com:99999",
            "http://example.com:port",
            "http://[::1",
            "https://example.com/" + "a" * 2048,
            None,
            42,
        ]
        for url in invalid_urls:
            with pytest.raises(InvalidURLError):
                await validator.validate(url)

        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_multibyte_url_over_byte_cap_skips_dns(self, validator, resolver):
        with pytest.raises(InvalidURLError):
            await validator.validate("http://example.com/" + "漢" * 1000)

        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_unresolvable_host(self, validator, resolver):
        with pytest.raises(InvalidURLError) as exc_info:
            await validator.validate("https://no-such-host.invalid/page")

        assert exc_info.value.error_code == "invalid_url"
        assert resolver.calls == ["no-such-host.invalid"]

    @pytest.mark.asyncio
    async def test_lookup_timeout(self):
        """A lookup that exceeds the timeout counts as a failed lookup."""

        async def slow_resolver(hostname):
            await asyncio.sleep(5)
            return "127.0.0.1"

        validator = URLValidator(resolver=slow_resolver, lookup_timeout=0.05)
        with pytest.raises(InvalidURLError):
            await validator.validate("https://slow.example.com")

    @pytest.mark.asyncio
    async def test_unencodable_hostname(self):
        async def idna_resolver(hostname):
            hostname.encode("idna")
            return "127.0.0.1"

        validator = URLValidator(resolver=idna_resolver)
        with pytest.raises(InvalidURLError):
            await validator.validate("https://" + "a" * 70 + ".example.com")
