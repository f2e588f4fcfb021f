"""Abstract repository for global application settings."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.company import CompanyInfo
from orderdesk.domain.model.value_objects import Currency, ExchangeRates


class SettingsRepository(ABC):

    @abstractmethod
    def get_exchange_rates(self) -> ExchangeRates:
        """Return the currently active global rate table."""

    @abstractmethod
    def save_exchange_rates(self, rates: ExchangeRates) -> None: ...

    @abstractmethod
    def get_display_currency(self) -> Currency:
        """Return the currency the user has chosen to view amounts in."""

    @abstractmethod
    def save_display_currency(self, currency: Currency) -> None: ...

    @abstractmethod
    def get_units(self) -> list[str]:
        """Return the unit vocabulary for line items (e.g. 'Adet', 'M2')."""

    @abstractmethod
    def save_units(self, units: list[str]) -> None: ...

    @abstractmethod
    def get_name_suggestions(self) -> list[str]: ...

    @abstractmethod
    def save_name_suggestions(self, names: list[str]) -> None: ...

    @abstractmethod
    def get_description_suggestions(self) -> list[str]: ...

    @abstractmethod
    def save_description_suggestions(self, descriptions: list[str]) -> None: ...

    @abstractmethod
    def get_company_info(self) -> CompanyInfo:
        """Return the company header shown on orders."""

    @abstractmethod
    def save_company_info(self, info: CompanyInfo) -> None: ...
