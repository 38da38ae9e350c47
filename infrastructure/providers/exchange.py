"""Currency conversion feeds quoting ``target`` units per one ``base`` unit."""

from typing import Any

from domain.models.gold import Extraction, NotFound

from .base import ProviderSpec, build_registry, dig


def rates_table(payload: Any, target: str) -> Extraction:
    return dig(payload, "rates", target)


def open_er_api(payload: Any, target: str) -> Extraction:
    if isinstance(payload, dict) and payload.get("result") != "success":
        return NotFound(f"API error: {payload.get('error-type', 'unknown')}")
    return rates_table(payload, target)


def exchangerate_host(payload: Any, target: str) -> Extraction:
    if isinstance(payload, dict) and payload.get("success") is False:
        info = payload.get("error", {})
        message = info.get("info", "unknown") if isinstance(info, dict) else info
        return NotFound(f"API error: {message}")
    return rates_table(payload, target)


FRANKFURTER = ProviderSpec(
    name="frankfurter.app",
    url="https://api.frankfurter.app/latest",
    params={"from": "{base}", "to": "{target}"},
    extractor=rates_table,
)

OPEN_ER_API = ProviderSpec(
    name="open.er-api.com",
    url="https://open.er-api.com/v6/latest/{base}",
    extractor=open_er_api,
)

EXCHANGERATE_HOST = ProviderSpec(
    name="exchangerate.host",
    url="https://api.exchangerate.host/latest",
    params={"base": "{base}", "symbols": "{target}"},
    extractor=exchangerate_host,
)

RATE_PROVIDERS = build_registry(FRANKFURTER, OPEN_ER_API, EXCHANGERATE_HOST)
