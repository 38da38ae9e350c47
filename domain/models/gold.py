from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

FALLBACK_SOURCE = "fallback"


@dataclass(frozen=True)
class PriceQuote:
    value: Decimal
    unit: str  # e.g. "USD/oz" or "USD/KWD"
    provider_name: str


@dataclass(frozen=True)
class Found:
    value: Any


@dataclass(frozen=True)
class NotFound:
    reason: str


Extraction = Found | NotFound


@dataclass(frozen=True)
class FailureReason:
    provider_name: str
    reason: str

    def __str__(self) -> str:
        return f"{self.provider_name}: {self.reason}"


@dataclass(frozen=True)
class Resolved:
    quote: PriceQuote
    trail: tuple[FailureReason, ...] = ()

    @property
    def value(self) -> Decimal:
        return self.quote.value

    @property
    def source(self) -> str:
        return self.quote.provider_name


@dataclass(frozen=True)
class Fallback:
    """Every provider failed; carries the configured safe default."""

    value: Decimal
    unit: str
    trail: tuple[FailureReason, ...]

    @property
    def source(self) -> str:
        return FALLBACK_SOURCE


ResolutionOutcome = Resolved | Fallback


@dataclass(frozen=True)
class PriceTable:
    k24: Decimal
    k22: Decimal
    k21: Decimal
    k18: Decimal

    def as_dict(self) -> dict[str, Decimal]:
        return {"k24": self.k24, "k22": self.k22, "k21": self.k21, "k18": self.k18}


@dataclass(frozen=True)
class AggregateResult:
    prices: PriceTable
    provenance: str
    timestamp: datetime
    commodity: ResolutionOutcome
    rate: ResolutionOutcome

    @property
    def used_fallback(self) -> bool:
        return isinstance(self.commodity, Fallback) or isinstance(self.rate, Fallback)
