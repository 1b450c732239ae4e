"""
Upstream Fetcher

Issues the outbound GET under the configured redirect cap and deadline.
"""

import logging
from typing import Optional, Union

import anyio
import httpx

from shade.common.errors import Rejection, RejectionReason
from shade.common.url_validator import (
    ForbiddenDestinationError,
    check_destination,
    check_scheme,
)
from shade.domain.proxy import ProxyConfig, UpstreamResponse
from shade.upstream.base import UpstreamTransport
from shade.upstream.factory import get_upstream_transport

logger = logging.getLogger(__name__)


class UpstreamFetcher:
    """
    Upstream Fetcher

    Owns one pooled httpx.AsyncClient for the lifetime of the process.
    Connect, every redirect hop and receipt of the final headers share a
    single deadline of socket_timeout seconds. The body is not covered by
    that deadline; its size is bounded by the gatekeeper instead.
    """

    def __init__(
        self,
        config: ProxyConfig,
        transport: Optional[UpstreamTransport] = None,
    ):
        """
        Initialize fetcher

        Args:
            config: Proxy configuration
            transport: Transport strategy, selected from config when None
        """
        self.config = config
        self.transport = transport or get_upstream_transport(config)

        request_hooks = [check_scheme]
        if config.block_private_networks:
            request_hooks.append(check_destination)

        self._client = self.transport.build_client(
            timeout=config.socket_timeout,
            max_redirects=config.max_redirects,
            event_hooks={"request": request_hooks},
        )

    async def aclose(self) -> None:
        """Close the pooled client"""
        await self._client.aclose()

    async def fetch(
        self,
        url: str,
        headers: dict[str, str],
    ) -> Union[UpstreamResponse, Rejection]:
        """
        GET a URL, following redirects

        Args:
            url: Decoded target URL
            headers: Request headers from the header policy

        Returns:
            UpstreamResponse: Status, headers and an unread body, or
            Rejection: TOO_MANY_REDIRECTS, TIMEOUT, FORBIDDEN_DESTINATION or
                UPSTREAM_ERROR
        """
        logger.debug("Upstream request: url=%s headers=%s", url, headers)

        try:
            request = self._client.build_request("GET", url, headers=headers)
            with anyio.fail_after(self.config.socket_timeout):
                response = await self._client.send(request, stream=True)

        except httpx.TooManyRedirects as e:
            return Rejection(RejectionReason.TOO_MANY_REDIRECTS, f"Too many redirects: {e!r}")

        except (TimeoutError, httpx.TimeoutException) as e:
            return Rejection(RejectionReason.TIMEOUT, f"Timed out: {e!r}")

        except ForbiddenDestinationError as e:
            return Rejection(RejectionReason.FORBIDDEN_DESTINATION, str(e))

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Rejection(RejectionReason.UPSTREAM_ERROR, f"Request error: {e!r}")

        except Exception as e:
            logger.warning("Unexpected upstream error for %s", url, exc_info=True)
            return Rejection(RejectionReason.UPSTREAM_ERROR, f"Unexpected error: {e!r}")

        logger.debug(
            "Upstream response: url=%s status=%s redirects=%d",
            response.url,
            response.status_code,
            len(response.history),
        )

        return UpstreamResponse(
            status_code=response.status_code,
            headers=response.headers,
            # Raw bytes: content-encoding is relayed, not decoded
            chunks=response.aiter_raw(),
            closer=response.aclose,
            url=str(response.url),
        )
