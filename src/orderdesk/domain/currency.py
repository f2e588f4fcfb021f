"""Money/currency conversion between the canonical currency and display currencies.

Pure functions, no state. Amounts are stored in the canonical currency;
these helpers are the only place another currency comes into play.
"""

from __future__ import annotations

from decimal import Decimal

from orderdesk.domain.financials import round_cents
from orderdesk.domain.model.value_objects import (
    CANONICAL_CURRENCY,
    Currency,
    ExchangeRates,
)

# Used when a rate table has no usable rate for a currency, so display code
# never divides by zero.
FALLBACK_RATES = {
    Currency.USD: Decimal("32.0"),
    Currency.EUR: Decimal("35.0"),
}


def effective_rate(currency: Currency, rates: ExchangeRates | None) -> Decimal:
    """Return the usable rate for *currency*, falling back if missing or <= 0."""
    if currency is CANONICAL_CURRENCY:
        return Decimal("1")
    rate = rates.rate_for(currency) if rates is not None else None
    if rate is None or not rate.is_finite() or rate <= 0:
        return FALLBACK_RATES[currency]
    return rate


def convert(amount: Decimal, target_currency: Currency, rates: ExchangeRates | None) -> Decimal:
    """Convert a canonical amount into *target_currency*."""
    if target_currency is CANONICAL_CURRENCY:
        return amount
    return amount / effective_rate(target_currency, rates)


def to_canonical(amount: Decimal, source_currency: Currency, rates: ExchangeRates | None) -> Decimal:
    """Convert an amount entered in *source_currency* into the canonical currency.

    Inverse of ``convert``; used when a price is typed in a foreign
    currency.  Only the canonical result is ever stored.
    """
    if source_currency is CANONICAL_CURRENCY:
        return amount
    return amount * effective_rate(source_currency, rates)


def format_amount(amount: Decimal, currency: Currency) -> str:
    """Render an amount as e.g. ``₺1.234,56`` (Turkish grouping, two decimals)."""
    rounded = round_cents(amount)
    if not rounded.is_finite():
        return f"{currency.symbol}{rounded}"
    sign = "-" if rounded < 0 else ""
    grouped = f"{abs(rounded):,.2f}"
    # swap "," and "." to get tr-TR separators
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{currency.symbol}{localized}"
