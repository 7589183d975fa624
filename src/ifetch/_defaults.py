"""Default configuration values for requests.

The defaults are read-only mappings. Every request deep-merges them into a
fresh dict, so nothing downstream can modify them in place.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Final

DEFAULT_HEADERS: Final[MappingProxyType[str, str]] = MappingProxyType(
    {
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Pragma": "no-cache",
        "Cache-Control": "no-cache",
        "Upgrade-Insecure-Requests": "1",
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 6.1) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/69.0.3497.100 Safari/537.36"
        ),
    }
)

DEFAULT_OPTIONS: Final[MappingProxyType[str, Any]] = MappingProxyType(
    {
        "method": "get",
        "headers": DEFAULT_HEADERS,
        "body": None,
        "credentials": "include",
        "cache": "no-cache",
        # "manual" hands redirects back to the caller, "error" rejects them
        "redirect": "follow",
    }
)

# Anti-hijacking guard some JSON endpoints prepend to their bodies.
JSON_HIJACK_PREFIX: Final = "for (;;);\r\n"

JSON_CONTENT_TYPE: Final = "application/json"
FORM_CONTENT_TYPE: Final = "application/x-www-form-urlencoded"

# Keyword arguments of httpx's request() that options may pass straight through.
TRANSPORT_KWARGS: Final = frozenset({"cookies", "auth", "timeout", "params", "files"})
