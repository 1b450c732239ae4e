"""
Proxy API

Single catch-all route: every method and path is handed to the dispatcher.
"""

from urllib.parse import unquote_plus

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from shade.api.deps import get_proxy_service
from shade.domain.proxy import InboundRequest

router = APIRouter(tags=["Proxy"])


def parse_raw_query(query_string: bytes) -> dict[str, str]:
    """
    Split a query string without decoding its values

    Names are decoded so that "url" matches however it is written; values
    are returned exactly as sent. When a name repeats, the last value wins.
    Bytes outside ASCII are read as UTF-8, the same encoding percent-escapes
    decode to.

    Args:
        query_string: Raw ASGI query string

    Returns:
        dict: name -> still percent-encoded value
    """
    params: dict[str, str] = {}
    for pair in query_string.decode("utf-8", errors="replace").split("&"):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        params[unquote_plus(name)] = value
    return params


def build_inbound_request(request: Request) -> InboundRequest:
    """
    Translate a Starlette request into the pipeline's InboundRequest

    Args:
        request: FastAPI request object

    Returns:
        InboundRequest: Method, path, raw query and forwarded headers
    """
    return InboundRequest(
        method=request.method,
        path=request.url.path,
        query=parse_raw_query(request.scope.get("query_string", b"")),
        accept=request.headers.get("accept"),
        accept_encoding=request.headers.get("accept-encoding"),
    )


async def proxy(request: Request) -> StreamingResponse:
    """
    Proxy Endpoint

    GET /<hex digest>?url=<percent-encoded url>; any other method gets the
    index response from the dispatcher.
    """
    service = get_proxy_service(request)
    result = await service.dispatch(build_inbound_request(request))
    return StreamingResponse(
        result.body,
        status_code=result.status_code,
        headers=dict(result.headers),
    )


class CatchAllEndpoint:
    """
    ASGI wrapper around proxy()

    Starlette restricts function endpoints to GET when no methods are given;
    an ASGI endpoint with no method list matches every method, so unusual
    verbs reach the dispatcher instead of getting a 405.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = await proxy(Request(scope, receive))
        await response(scope, receive, send)


router.add_route("/{path:path}", CatchAllEndpoint(), include_in_schema=False)
