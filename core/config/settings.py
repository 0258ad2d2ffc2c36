"""
Wegesa Core Config — Application Settings
===========================================
Business settings read once at start-up. Django settings carry the
raw values (from environment variables); engines only ever see this
frozen object.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

DEFAULT_INVOICE_PREFIX = "WGS"
DEFAULT_CURRENCY = "TZS"
DEFAULT_TAX_RATE = Decimal("18")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class AppSettings:
    """
    invoice_prefix:   Invoice numbers look like '<prefix>-2026-001'.
    currency:         ISO code stamped on invoices and transactions.
    default_tax_rate: Percent applied to new invoices when none given.
    seed_demo_data:   Load the demo users/items/employees on start-up.
    """

    invoice_prefix: str = DEFAULT_INVOICE_PREFIX
    currency: str = DEFAULT_CURRENCY
    default_tax_rate: Decimal = DEFAULT_TAX_RATE
    seed_demo_data: bool = False

    def __post_init__(self) -> None:
        if not self.invoice_prefix or "-" in self.invoice_prefix:
            raise ValueError("invoice_prefix must be non-empty and contain no '-'.")
        if len(self.currency) != 3 or not self.currency.isalpha():
            raise ValueError(f"currency must be a 3-letter code, got '{self.currency}'.")
        if not isinstance(self.default_tax_rate, Decimal):
            raise ValueError("default_tax_rate must be Decimal.")
        if not Decimal(0) <= self.default_tax_rate <= Decimal(100):
            raise ValueError("default_tax_rate must be between 0 and 100.")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AppSettings:
        """Build from a settings dict with upper-case keys (Django style)."""
        raw_rate = data.get("DEFAULT_TAX_RATE", DEFAULT_TAX_RATE)
        try:
            tax_rate = Decimal(str(raw_rate))
        except InvalidOperation as exc:
            raise ValueError(f"DEFAULT_TAX_RATE '{raw_rate}' is not a number.") from exc
        return cls(
            invoice_prefix=str(data.get("INVOICE_PREFIX", DEFAULT_INVOICE_PREFIX)),
            currency=str(data.get("CURRENCY", DEFAULT_CURRENCY)).upper(),
            default_tax_rate=tax_rate,
            seed_demo_data=_as_bool(data.get("SEED_DEMO_DATA", False)),
        )
