"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
All money is held as ``Decimal`` in the canonical currency (TRY); other
currencies only ever appear at display or data-entry time.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from orderdesk.domain.exceptions import ValidationError


class Currency(Enum):
    TRY = "TRY"
    USD = "USD"
    EUR = "EUR"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Currency.TRY: "₺",
    Currency.USD: "$",
    Currency.EUR: "€",
}

CANONICAL_CURRENCY = Currency.TRY


class DiscountKind(Enum):
    PERCENTAGE = "percentage"
    AMOUNT = "amount"  # fixed amount in the canonical currency


@dataclass(frozen=True)
class ExchangeRates:
    """Rate table expressed as "1 foreign unit = N canonical units".

    A rate may be missing (``None``) or non-positive; conversion code
    treats such rates as unusable and falls back to a fixed rate.
    """

    usd: Decimal | None
    eur: Decimal | None

    def rate_for(self, currency: Currency) -> Decimal | None:
        if currency is Currency.USD:
            return self.usd
        if currency is Currency.EUR:
            return self.eur
        return Decimal("1")

    @staticmethod
    def of(usd: str | float | int | Decimal, eur: str | float | int | Decimal) -> ExchangeRates:
        """Build a user-entered rate table; both rates must be positive."""
        usd_rate, eur_rate = to_decimal(usd), to_decimal(eur)
        if usd_rate <= 0 or eur_rate <= 0:
            raise ValidationError("Exchange rates must be greater than zero")
        return ExchangeRates(usd=usd_rate, eur=eur_rate)


INITIAL_EXCHANGE_RATES = ExchangeRates(usd=Decimal("32.50"), eur=Decimal("35.20"))


# --- Helpers ----------------------------------------------------------------


def to_decimal(value: str | float | int | Decimal) -> Decimal:
    """Coerce user input to a finite Decimal; NaN and Infinity are rejected."""
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid number: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid number: {value!r}")
    return result


def parse_currency(code: str | Currency) -> Currency:
    if isinstance(code, Currency):
        return code
    try:
        return Currency(code.strip().upper())
    except ValueError as exc:
        supported = ", ".join(c.value for c in Currency)
        raise ValidationError(
            f"Unsupported currency {code!r} (expected one of {supported})"
        ) from exc


def new_id() -> str:
    return uuid.uuid4().hex
