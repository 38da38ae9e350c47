# nosec B101


import pytest

from domain.models.gold import Found, NotFound
from infrastructure.providers import COMMODITY_PROVIDERS, RATE_PROVIDERS, dig, select
from infrastructure.providers.commodity import (
    coinbase_paxg,
    goldprice_org,
    metals_live_series,
    metals_live_spot,
)
from infrastructure.providers.exchange import FRANKFURTER, OPEN_ER_API, exchangerate_host, open_er_api, rates_table


# ============================================================================
# TEST: dig()
# ============================================================================

def test_dig_walks_nested_objects_and_arrays():
    payload = {'items': [{'xauPrice': 2370.5}]}

    assert dig(payload, 'items', 0, 'xauPrice') == Found(2370.5)


def test_dig_negative_index_reads_from_the_end():
    assert dig([{'price': 1}, {'price': 2}], -1, 'price') == Found(2)


@pytest.mark.parametrize(
    'payload, path',
    [
        ({}, ('rates', 'KWD')),
        ({'rates': {}}, ('rates', 'KWD')),
        ({'rates': None}, ('rates', 'KWD')),
        ({'items': []}, ('items', 0)),
        ({'items': {'0': 1}}, ('items', 0)),
        ('not a dict', ('rates',)),
        ({'price': None}, ('price',)),
    ],
)
def test_dig_returns_not_found_instead_of_raising(payload, path):
    assert isinstance(dig(payload, *path), NotFound)


def test_dig_reason_names_the_missing_key():
    result = dig({'rates': {'EUR': 0.9}}, 'rates', 'KWD')

    assert result == NotFound("missing 'KWD' at $['rates']")


# ============================================================================
# TEST: commodity extractors
# ============================================================================

def test_metals_live_spot_finds_gold_in_any_position():
    payload = [{'silver': 29.41}, {'gold': 2370.0}, {'platinum': 990.2}]

    assert metals_live_spot(payload) == Found(2370.0)


def test_metals_live_spot_without_gold():
    assert isinstance(metals_live_spot([{'silver': 29.41}]), NotFound)
    assert isinstance(metals_live_spot({'gold': 2370.0}), NotFound)


def test_metals_live_series_takes_last_element():
    payload = [
        {'timestamp': 1700000000, 'price': 2360.0},
        {'timestamp': 1700000060, 'price': 2371.25},
    ]

    assert metals_live_series(payload) == Found(2371.25)


def test_metals_live_series_empty():
    assert metals_live_series([]) == NotFound('empty price series')


def test_goldprice_org_reads_first_item():
    payload = {'ts': 1, 'items': [{'curr': 'USD', 'xauPrice': 2369.87, 'xagPrice': 29.1}]}

    assert goldprice_org(payload) == Found(2369.87)


def test_coinbase_paxg_returns_string_amount_untouched():
    payload = {'data': {'amount': '2372.15', 'base': 'PAXG', 'currency': 'USD'}}

    assert coinbase_paxg(payload) == Found('2372.15')


# ============================================================================
# TEST: exchange rate extractors
# ============================================================================

def test_rates_table_uses_target_currency():
    payload = {'amount': 1.0, 'base': 'USD', 'rates': {'KWD': 0.30712}}

    assert rates_table(payload, 'KWD') == Found(0.30712)
    assert isinstance(rates_table(payload, 'EUR'), NotFound)


def test_open_er_api_rejects_error_result():
    payload = {'result': 'error', 'error-type': 'unsupported-code'}

    assert open_er_api(payload, 'KWD') == NotFound('API error: unsupported-code')


def test_open_er_api_success():
    payload = {'result': 'success', 'base_code': 'USD', 'rates': {'KWD': 0.3071}}

    assert open_er_api(payload, 'KWD') == Found(0.3071)


def test_exchangerate_host_reports_api_error():
    payload = {'success': False, 'error': {'code': 101, 'info': 'missing_access_key'}}

    assert exchangerate_host(payload, 'KWD') == NotFound('API error: missing_access_key')


# ============================================================================
# TEST: ProviderSpec rendering and selection
# ============================================================================

def test_render_fills_currency_placeholders():
    url, params = FRANKFURTER.render(base='USD', target='KWD')

    assert url == 'https://api.frankfurter.app/latest'
    assert params == {'from': 'USD', 'to': 'KWD'}


def test_render_fills_url_placeholder():
    url, params = OPEN_ER_API.render(base='USD', target='KWD')

    assert url == 'https://open.er-api.com/v6/latest/USD'
    assert params == {}


def test_select_keeps_configured_order():
    providers = select(RATE_PROVIDERS, ['exchangerate.host', 'frankfurter.app'])

    assert [p.name for p in providers] == ['exchangerate.host', 'frankfurter.app']


def test_select_unknown_provider_fails_fast():
    with pytest.raises(ValueError) as exc_info:
        select(COMMODITY_PROVIDERS, ['metals.live', 'kitco'])

    assert 'kitco' in str(exc_info.value)


def test_default_registries_are_populated():
    assert list(COMMODITY_PROVIDERS) == ['metals.live', 'metals.live/gold', 'goldprice.org', 'coinbase-paxg']
    assert list(RATE_PROVIDERS) == ['frankfurter.app', 'open.er-api.com', 'exchangerate.host']
