"""
Upstream Transport Factory Module

Selects the transport strategy from the proxy configuration.
"""

import logging
from typing import Optional

import httpx

from shade.domain.proxy import ProxyConfig
from shade.upstream.base import UpstreamTransport
from shade.upstream.direct import DirectTransport
from shade.upstream.proxied import ProxiedTransport

logger = logging.getLogger(__name__)


def get_upstream_transport(
    config: ProxyConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> UpstreamTransport:
    """
    Get the upstream transport for a configuration

    Args:
        config: Proxy configuration
        transport: Optional httpx transport passed through to the strategy

    Returns:
        UpstreamTransport: ProxiedTransport when an outbound proxy is
            configured, DirectTransport otherwise
    """
    if config.proxy is not None:
        logger.info("Routing upstream requests via proxy %s", config.proxy.url)
        return ProxiedTransport(config.proxy, transport=transport)
    return DirectTransport(transport=transport)
