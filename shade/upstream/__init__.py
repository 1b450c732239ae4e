"""
Upstream Module Initialization
"""

from shade.upstream.base import UpstreamTransport
from shade.upstream.direct import DirectTransport
from shade.upstream.proxied import ProxiedTransport
from shade.upstream.factory import get_upstream_transport
from shade.upstream.fetcher import UpstreamFetcher

__all__ = [
    "UpstreamTransport",
    "DirectTransport",
    "ProxiedTransport",
    "get_upstream_transport",
    "UpstreamFetcher",
]
