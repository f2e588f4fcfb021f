"""Application services: global settings (rates, display currency, units,
company header).

Changing the global rate table affects new and re-saved orders only;
persisted orders keep the rates they were written with.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.company import CompanyInfo
from orderdesk.domain.model.value_objects import (
    Currency,
    ExchangeRates,
    parse_currency,
)
from orderdesk.domain.repository.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class ExchangeRatesHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def current(self) -> ExchangeRates:
        return self._settings_repo.get_exchange_rates()

    def handle(self, usd: str | Decimal, eur: str | Decimal) -> ExchangeRates:
        rates = ExchangeRates.of(usd, eur)
        self._settings_repo.save_exchange_rates(rates)
        logger.info("Exchange rates set: USD=%s EUR=%s", rates.usd, rates.eur)
        return rates


class DisplayCurrencyHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def current(self) -> Currency:
        return self._settings_repo.get_display_currency()

    def handle(self, currency: str | Currency) -> Currency:
        chosen = parse_currency(currency)
        self._settings_repo.save_display_currency(chosen)
        return chosen


class ProductUnitsHandler:
    """Maintains the unit vocabulary offered for line items."""

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def list_units(self) -> list[str]:
        return self._settings_repo.get_units()

    def add_unit(self, unit: str) -> list[str]:
        value = (unit or "").strip()
        if not value:
            raise ValidationError("Unit name is required")
        units = self._settings_repo.get_units()
        if value not in units:
            units.append(value)
            self._settings_repo.save_units(units)
        return units

    def remove_unit(self, unit: str) -> list[str]:
        units = self._settings_repo.get_units()
        remaining = [u for u in units if u != unit]
        if len(remaining) != len(units):
            self._settings_repo.save_units(remaining)
        return remaining


class CompanyInfoHandler:
    """Edits the company header; fields left as ``None`` keep their value."""

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def current(self) -> CompanyInfo:
        return self._settings_repo.get_company_info()

    def handle(
        self,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> CompanyInfo:
        existing = self._settings_repo.get_company_info()
        info = CompanyInfo.of(
            name=existing.name if name is None else name,
            email=existing.email if email is None else email,
            phone=existing.phone if phone is None else phone,
            address=existing.address if address is None else address,
        )
        self._settings_repo.save_company_info(info)
        logger.info("Company info set: %s", info.name)
        return info
