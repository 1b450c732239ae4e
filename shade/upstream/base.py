"""
Upstream Transport Base Class

Defines the interface for building the outbound HTTP client.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import httpx

EventHooks = dict[str, list[Callable[..., Any]]]


class UpstreamTransport(ABC):
    """
    Upstream Transport Abstract Base Class

    Chosen once at startup. Implementations decide how outbound connections
    are made (directly or through a proxy); redirect and timeout policy is
    applied the same way by every implementation.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize transport

        Args:
            transport: Optional httpx transport to send requests through
                (e.g. httpx.MockTransport); the default network transport is
                used when None
        """
        self._transport = transport

    @abstractmethod
    def client_options(self) -> dict[str, Any]:
        """
        Connection options specific to this transport

        Returns:
            dict: Extra httpx.AsyncClient keyword arguments
        """
        pass

    def build_client(
        self,
        timeout: float,
        max_redirects: int,
        event_hooks: Optional[EventHooks] = None,
    ) -> httpx.AsyncClient:
        """
        Create the shared outbound client

        Args:
            timeout: Socket timeout (seconds)
            max_redirects: Maximum redirect hops followed
            event_hooks: httpx event hooks, e.g. a per-hop destination check

        Returns:
            httpx.AsyncClient: Configured client
        """
        options = self.client_options()
        if self._transport is not None:
            options["transport"] = self._transport

        return httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            max_redirects=max_redirects,
            event_hooks=event_hooks or {},
            # Environment proxy variables must not override the configured strategy
            trust_env=False,
            **options,
        )
