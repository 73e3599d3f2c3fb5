"""URL normalization and host extraction."""

import re
from urllib.parse import urlsplit

from constants import DEFAULT_SCHEME

_SCHEME_RE = re.compile(r"^(https?|ftp)://", re.IGNORECASE)


def has_scheme(url: str) -> bool:
    return bool(_SCHEME_RE.match(url))


def normalize(url: str) -> str:
    """Return ``url`` with an explicit scheme, adding ``http://`` if missing.

    Already-prefixed URLs (http, https, ftp in any case) are returned as-is,
    so normalizing twice yields the same string.
    """
    url = url.strip()
    if has_scheme(url):
        return url
    return DEFAULT_SCHEME + url


def hostname_of(value: str) -> str:
    """Extract the lower-case host name from a bare host or a full URL."""
    value = value.strip()
    if "://" not in value:
        value = "//" + value
    host = urlsplit(value).hostname
    return host or ""
