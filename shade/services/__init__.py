"""
Service Layer Module Initialization
"""

from shade.services.dispatcher import ProxyService
from shade.services.gatekeeper import AcceptedBody, filter_and_relay

__all__ = [
    "ProxyService",
    "AcceptedBody",
    "filter_and_relay",
]
