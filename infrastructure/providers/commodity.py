"""Gold spot price feeds, all quoting USD per troy ounce."""

from typing import Any

from domain.models.gold import Extraction, NotFound

from .base import ProviderSpec, build_registry, dig


def metals_live_spot(payload: Any, target: str = "") -> Extraction:
    # [{"gold": 2370.1}, {"silver": 29.4}, ...]; gold is usually first but not guaranteed
    if not isinstance(payload, list):
        return NotFound("expected list of metal objects")
    for entry in payload:
        if isinstance(entry, dict) and "gold" in entry:
            return dig(entry, "gold")
    return NotFound("no 'gold' entry in spot list")


def metals_live_series(payload: Any, target: str = "") -> Extraction:
    # [{"timestamp": ..., "price": ...}, ...] oldest first
    if not payload:
        return NotFound("empty price series")
    return dig(payload, -1, "price")


def goldprice_org(payload: Any, target: str = "") -> Extraction:
    return dig(payload, "items", 0, "xauPrice")


def coinbase_paxg(payload: Any, target: str = "") -> Extraction:
    return dig(payload, "data", "amount")


METALS_LIVE = ProviderSpec(
    name="metals.live",
    url="https://api.metals.live/v1/spot",
    extractor=metals_live_spot,
)

METALS_LIVE_GOLD = ProviderSpec(
    name="metals.live/gold",
    url="https://api.metals.live/v1/spot/gold",
    extractor=metals_live_series,
)

GOLDPRICE_ORG = ProviderSpec(
    name="goldprice.org",
    url="https://data-asg.goldprice.org/dbXRates/USD",
    extractor=goldprice_org,
    headers={"User-Agent": "Mozilla/5.0"},
)

COINBASE_PAXG = ProviderSpec(
    name="coinbase-paxg",
    url="https://api.coinbase.com/v2/prices/PAXG-USD/spot",
    extractor=coinbase_paxg,
)

COMMODITY_PROVIDERS = build_registry(METALS_LIVE, METALS_LIVE_GOLD, GOLDPRICE_ORG, COINBASE_PAXG)
