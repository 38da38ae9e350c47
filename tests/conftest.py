"""
Shared fixtures for resolver, aggregator and API tests.
"""

from unittest.mock import AsyncMock

import pytest

from infrastructure.http import FetchClient
from infrastructure.providers.base import ProviderSpec, dig


def price_extractor(payload, target=''):
    return dig(payload, 'price')


@pytest.fixture
def make_spec():
    """Build a ProviderSpec at https://<name>/latest reading {"price": ...} by default."""
    def _make_spec(name: str, extractor=price_extractor, **kwargs) -> ProviderSpec:
        return ProviderSpec(name=name, url=f'https://{name}/latest', extractor=extractor, **kwargs)

    return _make_spec


@pytest.fixture
def mock_fetch_client():
    """FetchClient whose fetch() answers per URL from ``bodies``: a str body or an exception."""
    client = AsyncMock(spec=FetchClient)
    client.bodies = {}

    async def fetch(url, params=None, headers=None):
        result = client.bodies[url]
        if isinstance(result, Exception):
            raise result
        return result

    client.fetch.side_effect = fetch
    return client


@pytest.fixture
def no_sleep():
    return AsyncMock()
