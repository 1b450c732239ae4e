"""
Proxy Dispatcher Module

Implements the request pipeline: routing, digest verification, upstream
fetch, response validation and header translation.
"""

import logging
from typing import Union
from urllib.parse import unquote_plus

from shade.common import digest
from shade.common.errors import Rejection, RejectionReason
from shade.common.headers import build_client_headers, build_upstream_headers
from shade.common.responses import FAVICON_RESPONSE, INDEX_RESPONSE, NOT_FOUND_RESPONSE
from shade.domain.proxy import (
    InboundRequest,
    ProxyConfig,
    ProxyResult,
    TargetReference,
    replay,
)
from shade.services.gatekeeper import filter_and_relay
from shade.upstream.fetcher import UpstreamFetcher

logger = logging.getLogger(__name__)
rejection_logger = logging.getLogger("shade.rejections")


class ProxyService:
    """
    Proxy Core Service

    Handles one inbound request end to end:
    1. Route the index and favicon paths to canned responses
    2. Extract the claimed digest and target URL
    3. Decode the target once and verify its digest
    4. Fetch the target (bounded redirects and deadline)
    5. Validate status, MIME type and size while reading the body
    6. Build the client headers and return the result

    Every failure is answered with the same 404 so callers cannot tell
    which check failed.
    """

    def __init__(self, config: ProxyConfig, fetcher: UpstreamFetcher):
        """
        Initialize Service

        Args:
            config: Proxy configuration (shared, read-only)
            fetcher: Upstream fetcher
        """
        self.config = config
        self.fetcher = fetcher

    async def dispatch(self, request: InboundRequest) -> ProxyResult:
        """
        Process an inbound request

        Args:
            request: Inbound request

        Returns:
            ProxyResult: Exactly one result for every request
        """
        if request.method.upper() != "GET" or request.path == "/":
            return INDEX_RESPONSE.to_result()
        if request.path == "/favicon.ico":
            return FAVICON_RESPONSE.to_result()

        target = self.resolve_target(request)
        if isinstance(target, Rejection):
            return self.reject(target)

        try:
            result = await self.process_url(request, target.url)
        except Exception as e:
            logger.error("Internal error proxying %s", target.url, exc_info=True)
            result = Rejection(RejectionReason.UPSTREAM_ERROR, f"Internal server error: {e!r}")

        if isinstance(result, Rejection):
            return self.reject(result)
        return result

    def resolve_target(self, request: InboundRequest) -> Union[TargetReference, Rejection]:
        """
        Extract and verify the target of a request

        The url query value arrives still percent-encoded and is decoded
        here, once.

        Args:
            request: Inbound request

        Returns:
            TargetReference: Verified target, or
            Rejection: MISSING_PARAMETERS or INVALID_DIGEST
        """
        provided_digest = request.path[1:] if request.path.startswith("/") else request.path
        provided_url = request.query.get("url")

        # An empty url is present; it fails the digest check instead
        if not provided_digest or provided_url is None:
            return Rejection(RejectionReason.MISSING_PARAMETERS, "Digest or URL missing")

        url = unquote_plus(provided_url)
        if not digest.verify(provided_digest, url, self.config.key, self.config.digest_algorithm):
            return Rejection(RejectionReason.INVALID_DIGEST, f"Invalid digest for {url}")

        return TargetReference(url=url, digest=provided_digest)

    async def process_url(
        self,
        request: InboundRequest,
        url: str,
    ) -> Union[ProxyResult, Rejection]:
        """
        Fetch a verified URL and build the client result

        Args:
            request: Inbound request (source of Accept headers)
            url: Decoded, verified target URL

        Returns:
            ProxyResult: 200 result, or
            Rejection: From the fetcher or gatekeeper
        """
        headers_to_send = build_upstream_headers(
            accept=request.accept,
            accept_encoding=request.accept_encoding,
            via=self.config.via,
        )

        response = await self.fetcher.fetch(url, headers_to_send)
        if isinstance(response, Rejection):
            return response

        accepted = await filter_and_relay(
            response,
            byte_limit=self.config.length_limit,
            mime_whitelist=self.config.mime_types,
        )
        if isinstance(accepted, Rejection):
            return accepted

        return ProxyResult(
            status_code=200,
            headers=build_client_headers(accepted.headers),
            body=replay(accepted.chunks),
        )

    def reject(self, rejection: Rejection) -> ProxyResult:
        """
        Log a rejection (when enabled) and return the canned 404

        Args:
            rejection: Rejection from any stage

        Returns:
            ProxyResult: Not Found result
        """
        if self.config.log_rejections:
            rejection_logger.info(rejection.describe())
        return NOT_FOUND_RESPONSE.to_result()
