# nosec B101


from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_price_aggregator
from api.main import app
from domain.exceptions.gold import AggregationError
from domain.models.gold import AggregateResult, FailureReason, Fallback, PriceQuote, PriceTable, Resolved

NOW = datetime(2025, 9, 27, 10, 30, 0, tzinfo=UTC)


def make_result(provenance='metals.live × frankfurter.app', commodity=None):
    return AggregateResult(
        prices=PriceTable(
            k24=Decimal('23.469'),
            k22=Decimal('21.513'),
            k21=Decimal('20.535'),
            k18=Decimal('17.602'),
        ),
        provenance=provenance,
        timestamp=NOW,
        commodity=commodity or Resolved(quote=PriceQuote(Decimal('2370.00'), 'USD/oz', 'metals.live')),
        rate=Resolved(quote=PriceQuote(Decimal('0.308'), 'USD/KWD', 'frankfurter.app')),
    )


@pytest.fixture
def mock_price_aggregator():
    mock_service = MagicMock()
    mock_service.get_prices = AsyncMock(return_value=make_result())
    return mock_service


@pytest.fixture
def client(mock_price_aggregator):
    # Override the real dependency with mock
    app.dependency_overrides[get_price_aggregator] = lambda: mock_price_aggregator
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    app.dependency_overrides.clear()


# ============================================================================
# TEST: GET /api/gold
# ============================================================================

def test_get_gold_prices_success(client, mock_price_aggregator):
    response = client.get('/api/gold')

    assert response.status_code == 200
    data = response.json()

    assert data['prices'] == {'k24': 23.469, 'k22': 21.513, 'k21': 20.535, 'k18': 17.602}
    assert data['source'] == 'metals.live × frankfurter.app'
    assert datetime.fromisoformat(data['updated'].replace('Z', '+00:00')) == NOW
    mock_price_aggregator.get_prices.assert_awaited_once()


def test_prices_are_json_numbers(client):
    data = client.get('/api/gold').json()

    for value in data['prices'].values():
        assert isinstance(value, float)


def test_response_is_cacheable_for_ten_seconds(client):
    response = client.get('/api/gold')

    assert response.headers['cache-control'] == 'public, max-age=10, s-maxage=10'
    assert response.headers['content-type'].startswith('application/json')


def test_fallback_is_still_a_success(client, mock_price_aggregator):
    mock_price_aggregator.get_prices.return_value = make_result(
        provenance='fallback × frankfurter.app',
        commodity=Fallback(
            value=Decimal('2350.00'),
            unit='USD/oz',
            trail=(FailureReason('metals.live', 'FetchError: HTTP 503'),),
        ),
    )

    response = client.get('/api/gold')

    assert response.status_code == 200
    assert response.json()['source'] == 'fallback × frankfurter.app'


def test_only_get_is_allowed(client):
    response = client.post('/api/gold')

    assert response.status_code == 405


# ============================================================================
# TEST: GET /api/gold - failures
# ============================================================================

def test_aggregation_error_returns_500(client, mock_price_aggregator):
    mock_price_aggregator.get_prices.side_effect = AggregationError('division by zero')

    response = client.get('/api/gold')

    assert response.status_code == 500
    assert response.json() == {'error': 'fetch failed', 'detail': 'division by zero'}
    assert 'cache-control' not in response.headers


def test_unexpected_exception_returns_500(client, mock_price_aggregator):
    mock_price_aggregator.get_prices.side_effect = RuntimeError('event loop closed')

    response = client.get('/api/gold')

    assert response.status_code == 500
    assert response.json() == {'error': 'fetch failed', 'detail': 'event loop closed'}


def test_uninitialized_aggregator_returns_500():
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get('/api/gold')

    assert response.status_code == 500
    assert response.json()['error'] == 'fetch failed'


# ============================================================================
# TEST: GET /health
# ============================================================================

def test_health_check(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.json() == {'status': 'ok', 'app': 'Gold Price API'}
