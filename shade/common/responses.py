"""
Canned Responses

Fixed responses for the index, favicon and every rejection.
"""

from types import MappingProxyType

from shade.common.headers import SECURITY_HEADERS
from shade.domain.proxy import CannedResponse

NOT_FOUND_RESPONSE = CannedResponse(
    status_code=404,
    headers=MappingProxyType(
        {
            **SECURITY_HEADERS,
            "Content-Type": "text/plain",
            "Cache-Control": "no-cache, no-store, private, must-revalidate",
        }
    ),
    body=b"Not Found",
)

INDEX_RESPONSE = CannedResponse(
    status_code=200,
    headers=MappingProxyType({**SECURITY_HEADERS, "Content-Type": "text/plain"}),
    body=b"hwhat",
)

FAVICON_RESPONSE = CannedResponse(
    status_code=200,
    headers=MappingProxyType({**SECURITY_HEADERS, "Content-Type": "text/plain"}),
    body=b"ok",
)
