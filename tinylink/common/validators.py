"""Validation utilities for short codes and target URLs."""

import re
from urllib.parse import urlparse


CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")

ALLOWED_SCHEMES = ("http", "https")

# Single-segment routes served ahead of /{code}
RESERVED_CODES = frozenset({"healthz"})


def is_valid_code(code) -> bool:
    """Check that ``code`` is 6 to 8 ASCII letters or digits.

    Args:
        code: The short code to validate

    Returns:
        True if the code has a valid format
    """
    if not isinstance(code, str):
        return False
    # fullmatch so a trailing newline is not accepted the way "$" would
    return CODE_PATTERN.fullmatch(code) is not None


def is_reserved_code(code) -> bool:
    """Check whether ``code`` collides with a fixed route such as /healthz."""
    return code in RESERVED_CODES


def is_valid_url(url) -> bool:
    """Check that ``url`` is an absolute http or https URL.

    Never raises; anything that does not parse is simply invalid.

    Args:
        url: The URL to validate

    Returns:
        True if the URL parses with an http/https scheme and a host
    """
    if not url or not isinstance(url, str):
        return False

    try:
        result = urlparse(url.strip())
        # Accessing .port raises ValueError on a malformed port
        result.port
    except ValueError:
        return False

    if result.scheme not in ALLOWED_SCHEMES:
        return False

    if not result.hostname or any(c.isspace() for c in result.netloc):
        return False

    return True
