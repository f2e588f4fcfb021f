"""Conversions between domain values and their JSON representation.

Decimals are stored as strings so no precision is lost in the file.
"""

from __future__ import annotations

from decimal import Decimal

from orderdesk.domain.model.value_objects import ExchangeRates


def dec_to_raw(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def dec_from_raw(raw: str | int | float | None) -> Decimal | None:
    return None if raw is None else Decimal(str(raw))


def rates_to_raw(rates: ExchangeRates) -> dict:
    return {"USD": dec_to_raw(rates.usd), "EUR": dec_to_raw(rates.eur)}


def rates_from_raw(raw: dict | None) -> ExchangeRates:
    raw = raw or {}
    return ExchangeRates(usd=dec_from_raw(raw.get("USD")), eur=dec_from_raw(raw.get("EUR")))
