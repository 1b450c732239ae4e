"""
Header Policy

Builds the header set sent upstream and translates upstream response headers
into the client-facing set. Only allow-listed upstream headers are forwarded,
and the security headers always take precedence over upstream values.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

SECURITY_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "X-Frame-Options": "deny",
        "X-XSS-Protection": "1; mode=block",
        "X-Content-Type-Options": "nosniff",
        "Content-Security-Policy": "default-src 'none'; img-src data:; style-src 'unsafe-inline'",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    }
)

# Copied from upstream to client when present, nothing else is.
# Content-Length is not in the list, so relaying Transfer-Encoding never
# produces a Content-Length + Transfer-Encoding pair.
PASSTHROUGH_HEADERS: tuple[str, ...] = (
    "content-type",
    "etag",
    "expires",
    "last-modified",
    "transfer-encoding",
    "content-encoding",
)

DEFAULT_CACHE_CONTROL = "public, max-age=31536000"
DEFAULT_ACCEPT = "image/*"


def build_upstream_headers(
    accept: Optional[str],
    accept_encoding: Optional[str],
    via: str,
) -> dict[str, str]:
    """
    Build headers for the upstream request

    Args:
        accept: Inbound Accept header, if any
        accept_encoding: Inbound Accept-Encoding header, if any
        via: Proxy identity string

    Returns:
        dict: Headers to send upstream (new dictionary)
    """
    return {
        "Via": via,
        "User-Agent": via,
        "Accept": accept if accept is not None else DEFAULT_ACCEPT,
        # Empty value asks for an unencoded body and overrides the client default
        "Accept-Encoding": accept_encoding if accept_encoding is not None else "",
    }


def _lookup(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive; httpx.Headers is not
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def build_client_headers(upstream_headers: Mapping[str, str]) -> dict[str, str]:
    """
    Build client response headers from upstream response headers

    Order of precedence (last wins): Cache-Control, passthrough headers,
    security headers.

    Args:
        upstream_headers: Upstream response headers

    Returns:
        dict: Client response headers (new dictionary)
    """
    result: dict[str, str] = {
        "Cache-Control": _lookup(upstream_headers, "cache-control") or DEFAULT_CACHE_CONTROL,
    }

    for name in PASSTHROUGH_HEADERS:
        value = _lookup(upstream_headers, name)
        if value is not None:
            result[name] = value

    result.update(SECURITY_HEADERS)
    return result
