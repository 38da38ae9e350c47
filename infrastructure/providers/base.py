from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from domain.models.gold import Extraction, Found, NotFound

Extractor = Callable[[Any, str], Extraction]


@dataclass(frozen=True)
class ProviderSpec:
    """One upstream JSON endpoint and the pure function that finds its number.

    ``url`` and ``params`` values may contain ``{base}`` and ``{target}``
    placeholders; they are filled in per request by :meth:`render`.
    The extractor receives the parsed payload and the target currency.
    """

    name: str
    url: str
    extractor: Extractor
    params: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)

    def render(self, base: str = "", target: str = "") -> tuple[str, dict[str, str]]:
        url = self.url.format(base=base, target=target)
        params = {key: value.format(base=base, target=target) for key, value in self.params.items()}
        return url, params


def dig(payload: Any, *path: str | int) -> Extraction:
    """Walk nested dicts/lists; ints index lists (negative from the end)."""
    current = payload
    walked = "$"
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list):
                return NotFound(f"expected list at {walked}")
            if not -len(current) <= step < len(current):
                return NotFound(f"index {step} out of range at {walked}")
        elif not isinstance(current, dict) or step not in current:
            return NotFound(f"missing '{step}' at {walked}")
        current = current[step]
        walked = f"{walked}[{step!r}]"

    if current is None:
        return NotFound(f"null at {walked}")
    return Found(current)


def build_registry(*specs: ProviderSpec) -> dict[str, ProviderSpec]:
    return {spec.name: spec for spec in specs}


def select(registry: Mapping[str, ProviderSpec], names: list[str]) -> tuple[ProviderSpec, ...]:
    """Order providers by configured priority; unknown names fail fast."""
    unknown = [name for name in names if name not in registry]
    if unknown:
        raise ValueError(f"Unknown provider(s): {', '.join(unknown)}")
    return tuple(registry[name] for name in names)
