"""
Test Configuration Module
"""

from typing import Callable, Optional

import httpx
import pytest

from shade.config import Settings
from shade.domain.proxy import ProxyConfig
from shade.upstream.direct import DirectTransport
from shade.upstream.fetcher import UpstreamFetcher

TEST_KEY = "0x24FEEDFACEDEADBEEFCAFE"


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the .env file"""
    return Settings(_env_file=None, KEY=TEST_KEY, DIGEST_ALGORITHM="sha1")


@pytest.fixture
def proxy_config(settings) -> ProxyConfig:
    return ProxyConfig.from_settings(settings)


@pytest.fixture
def make_fetcher() -> Callable[..., UpstreamFetcher]:
    """Build a fetcher whose requests are answered by a mock handler"""

    def factory(handler, config: Optional[ProxyConfig] = None, **overrides) -> UpstreamFetcher:
        if config is None:
            config = ProxyConfig(
                key=TEST_KEY.encode(),
                mime_types=frozenset({"image/png"}),
                **overrides,
            )
        transport = DirectTransport(transport=httpx.MockTransport(handler))
        return UpstreamFetcher(config, transport)

    return factory
