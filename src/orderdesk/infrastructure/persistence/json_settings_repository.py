"""JSON-file-backed settings repository and order-number sequence.

Both live in the store's key-value settings file.  Missing keys fall back
to the application defaults.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.company import DEFAULT_COMPANY_INFO, CompanyInfo
from orderdesk.domain.model.order import parse_order_number
from orderdesk.domain.model.value_objects import (
    CANONICAL_CURRENCY,
    INITIAL_EXCHANGE_RATES,
    Currency,
    ExchangeRates,
)
from orderdesk.domain.repository.order_number_sequence import OrderNumberSequence
from orderdesk.domain.repository.settings_repository import SettingsRepository
from orderdesk.infrastructure.persistence.codecs import rates_from_raw, rates_to_raw
from orderdesk.infrastructure.persistence.json_order_repository import (
    ENTITY as ORDERS_ENTITY,
)
from orderdesk.infrastructure.persistence.json_store import JsonRecordStore

EXCHANGE_RATES_KEY = "exchange_rates"
DISPLAY_CURRENCY_KEY = "display_currency"
UNITS_KEY = "product_units"
NAME_SUGGESTIONS_KEY = "product_name_suggestions"
DESCRIPTION_SUGGESTIONS_KEY = "product_description_suggestions"
ORDER_COUNTER_KEY = "order_counter"
COMPANY_INFO_KEY = "company_info"

DEFAULT_PRODUCT_UNITS = ["Adet", "M2", "Mtül"]

# One writer per process: every sequence instance shares this lock.
_COUNTER_LOCK = threading.Lock()


class JsonSettingsRepository(SettingsRepository):

    def __init__(self, store: JsonRecordStore) -> None:
        self._store = store

    def get_exchange_rates(self) -> ExchangeRates:
        raw = self._store.get_setting(EXCHANGE_RATES_KEY)
        if raw is None:
            return INITIAL_EXCHANGE_RATES
        return rates_from_raw(raw)

    def save_exchange_rates(self, rates: ExchangeRates) -> None:
        self._store.set_setting(EXCHANGE_RATES_KEY, rates_to_raw(rates))

    def get_display_currency(self) -> Currency:
        raw = self._store.get_setting(DISPLAY_CURRENCY_KEY)
        return CANONICAL_CURRENCY if raw is None else Currency(raw)

    def save_display_currency(self, currency: Currency) -> None:
        self._store.set_setting(DISPLAY_CURRENCY_KEY, currency.value)

    def get_units(self) -> list[str]:
        return list(self._store.get_setting(UNITS_KEY, DEFAULT_PRODUCT_UNITS))

    def save_units(self, units: list[str]) -> None:
        self._store.set_setting(UNITS_KEY, list(units))

    def get_name_suggestions(self) -> list[str]:
        return list(self._store.get_setting(NAME_SUGGESTIONS_KEY, []))

    def save_name_suggestions(self, names: list[str]) -> None:
        self._store.set_setting(NAME_SUGGESTIONS_KEY, list(names))

    def get_description_suggestions(self) -> list[str]:
        return list(self._store.get_setting(DESCRIPTION_SUGGESTIONS_KEY, []))

    def save_description_suggestions(self, descriptions: list[str]) -> None:
        self._store.set_setting(DESCRIPTION_SUGGESTIONS_KEY, list(descriptions))

    def get_company_info(self) -> CompanyInfo:
        raw = self._store.get_setting(COMPANY_INFO_KEY)
        if raw is None:
            return DEFAULT_COMPANY_INFO
        return CompanyInfo(
            name=raw["name"],
            email=raw.get("email"),
            phone=raw.get("phone"),
            address=raw.get("address"),
        )

    def save_company_info(self, info: CompanyInfo) -> None:
        self._store.set_setting(COMPANY_INFO_KEY, {
            "name": info.name,
            "email": info.email,
            "phone": info.phone,
            "address": info.address,
        })


class JsonOrderNumberSequence(OrderNumberSequence):
    """Counter kept in settings, never behind the numbers already on disk.

    If an order was written but the counter update after it failed, the
    stored counter lags; the next value then comes from the highest
    sequence found among the persisted order numbers.
    """

    def __init__(self, store: JsonRecordStore) -> None:
        self._store = store

    def peek(self) -> int:
        counter = int(self._store.get_setting(ORDER_COUNTER_KEY, 1))
        return max(counter, self._highest_persisted() + 1)

    @contextmanager
    def reserve(self) -> Iterator[int]:
        with _COUNTER_LOCK:
            value = self.peek()
            yield value
            self._store.set_setting(ORDER_COUNTER_KEY, value + 1)

    def _highest_persisted(self) -> int:
        highest = 0
        for raw in self._store.get_all(ORDERS_ENTITY):
            try:
                _, sequence = parse_order_number(raw.get("order_number") or "")
            except ValidationError:
                continue
            highest = max(highest, sequence)
        return highest
