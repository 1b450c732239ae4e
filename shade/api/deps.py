"""
API Dependency Module

Provides the dependencies used by the proxy route.
"""

from fastapi import HTTPException, Request, status

from shade.services.dispatcher import ProxyService


def get_proxy_service(request: Request) -> ProxyService:
    """
    Get the proxy service created by the application factory

    Args:
        request: FastAPI request object

    Returns:
        ProxyService: Shared proxy service

    Raises:
        HTTPException: 503 if the application factory has not run
    """
    service = getattr(request.app.state, "proxy_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Proxy service not initialized",
        )
    return service
