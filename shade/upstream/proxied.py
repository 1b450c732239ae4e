"""
Proxied Transport

Routes every outbound connection through the configured proxy.
"""

from typing import Any, Optional

import httpx

from shade.domain.proxy import ProxyEndpoint
from shade.upstream.base import UpstreamTransport


class ProxiedTransport(UpstreamTransport):
    """
    Proxied Transport

    Credentials, when configured, are sent as proxy basic auth.
    """

    def __init__(
        self,
        endpoint: ProxyEndpoint,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(transport)
        self.endpoint = endpoint

    def client_options(self) -> dict[str, Any]:
        # A custom transport replaces the connection pool, proxy included
        if self._transport is not None:
            return {}
        return {"proxy": httpx.Proxy(self.endpoint.url, auth=self.endpoint.auth)}
