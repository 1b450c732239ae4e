"""
API Router Module Initialization
"""

from shade.api.proxy import router as proxy_router

__all__ = [
    "proxy_router",
]
