"""
Destination Validator

Request hooks run on every upstream hop, redirects included: only http(s)
URLs are followed, and optionally (SSRF protection) hops to loopback,
private and link-local addresses are refused.
"""

import ipaddress
import logging
import socket

import anyio
import httpx

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")

# Private IP ranges that should be blocked
PRIVATE_IP_RANGES = [
    ipaddress.ip_network("0.0.0.0/8"),        # "This" network
    ipaddress.ip_network("127.0.0.0/8"),      # Loopback
    ipaddress.ip_network("10.0.0.0/8"),       # Class A private
    ipaddress.ip_network("100.64.0.0/10"),    # Carrier-grade NAT
    ipaddress.ip_network("172.16.0.0/12"),    # Class B private
    ipaddress.ip_network("192.168.0.0/16"),   # Class C private
    ipaddress.ip_network("169.254.0.0/16"),   # Link-local
    ipaddress.ip_network("::1/128"),          # IPv6 loopback
    ipaddress.ip_network("fc00::/7"),         # IPv6 private
    ipaddress.ip_network("fe80::/10"),        # IPv6 link-local
]


class ForbiddenDestinationError(Exception):
    """Raised from the request hook when a hop targets a private address"""

    def __init__(self, host: str, address: str):
        super().__init__(f"{host} resolves to private address {address}")
        self.host = host
        self.address = address


def is_private_ip(ip_str: str) -> bool:
    """
    Check if an IP address is private/internal

    Args:
        ip_str: IP address string

    Returns:
        bool: True if the IP is private
    """
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return False
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return any(ip in network for network in PRIVATE_IP_RANGES)


async def resolve_addresses(hostname: str) -> list[str]:
    """
    Resolve hostname to its IP addresses

    Args:
        hostname: Hostname to resolve

    Returns:
        list: IP address strings, empty if resolution fails
    """
    try:
        infos = await anyio.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
    except OSError:
        return []
    return [str(info[4][0]) for info in infos]


async def check_scheme(request: httpx.Request) -> None:
    """
    httpx request hook accepting only absolute http(s) URLs

    Args:
        request: Outgoing request (initial or redirect hop)

    Raises:
        httpx.UnsupportedProtocol: If the URL is not http(s) or has no host
    """
    if request.url.scheme not in ALLOWED_SCHEMES or not request.url.host:
        raise httpx.UnsupportedProtocol(
            f"Unsupported upstream URL: {request.url}", request=request
        )


async def check_destination(request: httpx.Request) -> None:
    """
    httpx request hook rejecting private destinations

    Args:
        request: Outgoing request (initial or redirect hop)

    Raises:
        ForbiddenDestinationError: If the host is, or resolves to, a private IP
    """
    hostname = request.url.host
    if is_private_ip(hostname):
        logger.warning("Blocked upstream request to private IP '%s'", hostname)
        raise ForbiddenDestinationError(hostname, hostname)

    for address in await resolve_addresses(hostname):
        if is_private_ip(address):
            logger.warning(
                "Blocked upstream request: hostname '%s' resolves to private IP '%s'",
                hostname,
                address,
            )
            raise ForbiddenDestinationError(hostname, address)
