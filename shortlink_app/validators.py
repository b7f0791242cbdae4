"""Validation of inbound URLs and short-code path parameters.

These run at the request boundary; nothing behind them re-validates.
"""

from typing import Any

from pydantic import HttpUrl, TypeAdapter, ValidationError

from shortlink_app.constants import ALPHABET, MAX_URL_LENGTH, MIN_SHORT_CODE_LENGTH
from shortlink_app.exceptions import InvalidShortCodeError, InvalidURLError

_http_url = TypeAdapter(HttpUrl)
_alphabet = frozenset(ALPHABET)


def validate_url(value: Any) -> str:
    """Validate a URL to be shortened.

    Args:
        value: Raw value from the request

    Returns:
        The trimmed URL, exactly as submitted otherwise

    Raises:
        InvalidURLError: missing, not a string, too long, or not an
            absolute http/https URL
    """
    if value is None or not isinstance(value, str):
        raise InvalidURLError("The url field must be a non-empty string")

    url = value.strip()
    if not url:
        raise InvalidURLError("The url field must be a non-empty string")

    if len(url) > MAX_URL_LENGTH:
        raise InvalidURLError(f"URL exceeds maximum length of {MAX_URL_LENGTH} characters")

    try:
        # Only http and https are accepted, and a host is required
        _http_url.validate_python(url)
    except ValidationError as exc:
        raise InvalidURLError(
            "The URL must be a valid HTTP or HTTPS URL (e.g., https://example.com)"
        ) from exc

    return url


def validate_short_code(value: Any, length: int = MIN_SHORT_CODE_LENGTH) -> str:
    """Validate a short code path parameter.

    Args:
        value: Raw path parameter
        length: Configured code length (floored at the minimum)

    Raises:
        InvalidShortCodeError: missing, wrong length, or outside the alphabet
    """
    length = max(MIN_SHORT_CODE_LENGTH, length)

    if not value:
        raise InvalidShortCodeError("Short code is required")

    if not isinstance(value, str):
        raise InvalidShortCodeError("Short code must be a string")

    if len(value) != length:
        raise InvalidShortCodeError(f"Short code must be exactly {length} characters long")

    if not set(value) <= _alphabet:
        raise InvalidShortCodeError(
            f"Short code contains invalid characters. Only characters from [{ALPHABET}] are allowed"
        )

    return value
