"""URL policy for hero image preloading.

Decides whether an image source may be turned into a preload hint.
Data URLs are excluded since preloading inline payloads is pointless.
"""

import re
from typing import Final
from urllib.parse import urlsplit

# Schemes that never qualify for a preload hint
REJECTED_SCHEMES: Final[set[str]] = {
    "data",
}

# HTML allows a URL attribute to be surrounded by ASCII whitespace
ASCII_WHITESPACE: Final[str] = " \t\n\f\r"

# ASCII control characters other than ASCII whitespace
_INVALID_CHARS_RE: Final[re.Pattern[str]] = re.compile(r"[\x00-\x08\x0b\x0e-\x1f\x7f]")


def is_valid_url(url: str | None) -> bool:
    """Check if a string is a syntactically valid absolute or relative URL.

    Leading and trailing ASCII whitespace is ignored.

    Args:
        url: URL string to check (may be None).

    Returns:
        True if the URL can be parsed, False otherwise.
    """
    if not url or not isinstance(url, str):
        return False

    url = url.strip(ASCII_WHITESPACE)
    if not url:
        return False

    if _INVALID_CHARS_RE.search(url):
        return False

    try:
        parsed = urlsplit(url)
        # Accessing port validates it (raises ValueError when out of range)
        parsed.port
    except ValueError:
        return False

    if parsed.scheme and not (parsed.netloc or parsed.path):
        return False

    return True


def is_valid_non_data_url(url: str | None) -> bool:
    """Check if a URL is valid and does not use the data: scheme.

    Args:
        url: URL string to check (may be None).

    Returns:
        True if the URL is valid and not a data URL.
    """
    if not is_valid_url(url):
        return False
    scheme = urlsplit(url.strip(ASCII_WHITESPACE)).scheme
    return scheme.lower() not in REJECTED_SCHEMES
