"""
Unit tests for the header policy
"""

import httpx

from shade.common.headers import (
    DEFAULT_CACHE_CONTROL,
    PASSTHROUGH_HEADERS,
    SECURITY_HEADERS,
    build_client_headers,
    build_upstream_headers,
)


class TestUpstreamHeaders:
    """Tests for headers sent upstream"""

    def test_defaults(self):
        headers = build_upstream_headers(accept=None, accept_encoding=None, via="Shade Test")
        assert headers == {
            "Via": "Shade Test",
            "User-Agent": "Shade Test",
            "Accept": "image/*",
            "Accept-Encoding": "",
        }

    def test_forwards_inbound_accept_headers(self):
        headers = build_upstream_headers(
            accept="image/webp,image/*",
            accept_encoding="gzip",
            via="Shade Test",
        )
        assert headers["Accept"] == "image/webp,image/*"
        assert headers["Accept-Encoding"] == "gzip"

    def test_no_other_headers(self):
        headers = build_upstream_headers(accept=None, accept_encoding=None, via="v")
        assert set(headers) == {"Via", "User-Agent", "Accept", "Accept-Encoding"}


class TestClientHeaders:
    """Tests for client-facing response headers"""

    def test_security_headers_always_present(self):
        headers = build_client_headers({})
        for name, value in SECURITY_HEADERS.items():
            assert headers[name] == value

    def test_default_cache_control(self):
        assert build_client_headers({})["Cache-Control"] == DEFAULT_CACHE_CONTROL

    def test_upstream_cache_control(self):
        headers = build_client_headers({"Cache-Control": "max-age=60"})
        assert headers["Cache-Control"] == "max-age=60"

    def test_passthrough_headers_copied(self):
        upstream = {
            "Content-Type": "image/png",
            "ETag": '"abc"',
            "Expires": "Thu, 01 Dec 2030 16:00:00 GMT",
            "Last-Modified": "Tue, 15 Nov 1994 12:45:26 GMT",
            "Transfer-Encoding": "chunked",
            "Content-Encoding": "gzip",
        }
        headers = build_client_headers(upstream)
        assert headers["content-type"] == "image/png"
        assert headers["etag"] == '"abc"'
        assert headers["expires"] == "Thu, 01 Dec 2030 16:00:00 GMT"
        assert headers["last-modified"] == "Tue, 15 Nov 1994 12:45:26 GMT"
        assert headers["transfer-encoding"] == "chunked"
        assert headers["content-encoding"] == "gzip"

    def test_other_upstream_headers_dropped(self):
        upstream = httpx.Headers(
            {
                "Content-Type": "image/png",
                "Set-Cookie": "session=abc",
                "Content-Length": "1000",
                "Access-Control-Allow-Origin": "*",
                "X-Powered-By": "PHP",
            }
        )
        headers = build_client_headers(upstream)
        lowered = {name.lower() for name in headers}
        assert "set-cookie" not in lowered
        assert "content-length" not in lowered
        assert "access-control-allow-origin" not in lowered
        assert "x-powered-by" not in lowered
        assert lowered == {"cache-control", "content-type"} | {h.lower() for h in SECURITY_HEADERS}

    def test_upstream_cannot_override_security_headers(self):
        upstream = httpx.Headers(
            {
                "X-Frame-Options": "allowall",
                "Content-Security-Policy": "default-src *",
                "Strict-Transport-Security": "max-age=0",
            }
        )
        headers = build_client_headers(upstream)
        assert headers["X-Frame-Options"] == "deny"
        assert headers["Content-Security-Policy"] == SECURITY_HEADERS["Content-Security-Policy"]
        assert headers["Strict-Transport-Security"] == "max-age=31536000; includeSubDomains"
        assert sum(1 for name in headers if name.lower() == "x-frame-options") == 1

    def test_case_insensitive_lookup_on_plain_dict(self):
        headers = build_client_headers({"CONTENT-TYPE": "image/gif", "cache-control": "no-cache"})
        assert headers["content-type"] == "image/gif"
        assert headers["Cache-Control"] == "no-cache"

    def test_passthrough_list(self):
        assert PASSTHROUGH_HEADERS == (
            "content-type",
            "etag",
            "expires",
            "last-modified",
            "transfer-encoding",
            "content-encoding",
        )
