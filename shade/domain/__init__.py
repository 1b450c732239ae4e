"""
Domain Model Module Initialization
"""

from shade.domain.proxy import (
    CannedResponse,
    InboundRequest,
    ProxyConfig,
    ProxyEndpoint,
    ProxyResult,
    TargetReference,
    UpstreamResponse,
)

__all__ = [
    "CannedResponse",
    "InboundRequest",
    "ProxyConfig",
    "ProxyEndpoint",
    "ProxyResult",
    "TargetReference",
    "UpstreamResponse",
]
