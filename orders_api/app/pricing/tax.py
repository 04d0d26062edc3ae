from __future__ import annotations

"""Composable sales tax schedule (GST/PST/HST and friends).

Each enabled component produces its own tax line rounded to 0.01, and the
schedule total is the sum of those rounded lines so a receipt never shows
lines that disagree with the total.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Mapping

from .errors import InvalidTaxRateError
from .money import Amount, Money, to_decimal

# Conventional order of the jurisdictions on a bill.
STANDARD_COMPONENTS = ("gst", "pst", "hst")


@dataclass(frozen=True)
class TaxComponent:
    name: str
    rate: Decimal
    enabled: bool = True

    def __post_init__(self) -> None:
        try:
            rate = to_decimal(self.rate)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise InvalidTaxRateError(self.name, self.rate) from exc
        if not rate.is_finite() or not Decimal("0") <= rate <= Decimal("100"):
            raise InvalidTaxRateError(self.name, self.rate)
        object.__setattr__(self, "rate", rate)


@dataclass(frozen=True)
class TaxLine:
    name: str
    rate: Decimal
    amount: Money

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "rate": float(self.rate),
            "amount": self.amount.to_float(),
        }


@dataclass(frozen=True)
class TaxResult:
    lines: tuple[TaxLine, ...]
    total: Money


@dataclass(frozen=True)
class TaxSchedule:
    """Ordered set of named tax components."""

    components: tuple[TaxComponent, ...] = ()

    def __post_init__(self) -> None:
        components = tuple(self.components)
        names = [c.name.lower() for c in components]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate tax component names: {names}")
        object.__setattr__(self, "components", components)

    @classmethod
    def of(cls, components: Iterable[TaxComponent]) -> "TaxSchedule":
        return cls(tuple(components))

    @classmethod
    def from_settings(
        cls, settings: Mapping[str, Mapping[str, object]] | None
    ) -> "TaxSchedule":
        """Build a schedule from ``{"gst": {"enabled": ..., "taxRate": ...}}``.

        Standard components come first in GST, PST, HST order; any other keys
        follow in mapping order. ``None`` yields an empty (tax free) schedule.
        """

        if not settings:
            return cls()
        keys = [k for k in STANDARD_COMPONENTS if k in settings]
        keys += [k for k in settings if k not in STANDARD_COMPONENTS]
        components = []
        for key in keys:
            entry = settings[key] or {}
            components.append(
                TaxComponent(
                    name=key.upper(),
                    rate=entry.get("taxRate", entry.get("rate", 0)),
                    enabled=bool(entry.get("enabled", False)),
                )
            )
        return cls(tuple(components))

    @property
    def enabled_components(self) -> tuple[TaxComponent, ...]:
        return tuple(c for c in self.components if c.enabled)

    def compute_tax(self, base: Amount) -> TaxResult:
        """Return the per-component tax lines and their total for ``base``."""

        base = Money.of(base)
        lines = tuple(
            TaxLine(c.name, c.rate, base.percent_of(c.rate).round_to_cents())
            for c in self.enabled_components
        )
        return TaxResult(lines=lines, total=Money.sum(line.amount for line in lines))
