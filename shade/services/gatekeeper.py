"""
Response Gatekeeper

Validates an upstream response (status, MIME type, size) while reading its
body under the byte budget.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Union

from shade.common.errors import Rejection, RejectionReason
from shade.common.mime_types import extract_mime_type
from shade.domain.proxy import UpstreamResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcceptedBody:
    """
    Accepted Upstream Body

    The exact chunks received, in order, together with the upstream headers
    they arrived with.
    """

    headers: Mapping[str, str]
    chunks: tuple[bytes, ...]
    size: int


def _declared_length(headers: Mapping[str, str]) -> Optional[int]:
    value = headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def filter_and_relay(
    resp: UpstreamResponse,
    byte_limit: int,
    mime_whitelist: frozenset[str],
) -> Union[AcceptedBody, Rejection]:
    """
    Validate an upstream response and read its body

    Reading stops the moment the running total passes byte_limit; the rest
    of the body is never requested. The upstream response is closed on
    every path.

    Args:
        resp: Upstream response, body unread
        byte_limit: Maximum accepted body size (bytes)
        mime_whitelist: Accepted lowercase MIME types

    Returns:
        AcceptedBody: Body chunks, or
        Rejection: BAD_STATUS, BAD_MIME_TYPE, SIZE_LIMIT_EXCEEDED or UPSTREAM_ERROR
    """
    try:
        if not resp.is_success:
            return Rejection(RejectionReason.BAD_STATUS, f"Bad status code {resp.status_code}")

        mime_type = extract_mime_type(resp.headers.get("content-type"))
        if mime_type is None or mime_type not in mime_whitelist:
            return Rejection(RejectionReason.BAD_MIME_TYPE, f"Bad response MIME type {mime_type}")

        declared = _declared_length(resp.headers)
        if declared is not None and declared > byte_limit:
            return Rejection(
                RejectionReason.SIZE_LIMIT_EXCEEDED,
                f"Content-Length {declared} exceeds limit {byte_limit}",
            )

        chunks: list[bytes] = []
        total = 0
        exceeded = False
        try:
            async for chunk in resp.chunks:
                total += len(chunk)
                if total > byte_limit:
                    exceeded = True
                    break
                chunks.append(chunk)
        except Exception as e:
            return Rejection(RejectionReason.UPSTREAM_ERROR, f"Error reading body: {e!r}")

        if exceeded:
            return Rejection(
                RejectionReason.SIZE_LIMIT_EXCEEDED,
                f"Content-Length limit exceeded ({total} > {byte_limit})",
            )

        logger.debug("Accepted upstream body: %d bytes, %s", total, mime_type)
        return AcceptedBody(headers=resp.headers, chunks=tuple(chunks), size=total)

    finally:
        await resp.aclose()
