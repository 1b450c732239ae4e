"""
Direct Transport

Connects to upstream servers directly.
"""

from typing import Any

from shade.upstream.base import UpstreamTransport


class DirectTransport(UpstreamTransport):
    """Direct connections, no outbound proxy"""

    def client_options(self) -> dict[str, Any]:
        return {}
