"""Composition root: wires the JSON repositories to the domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from orderdesk.infrastructure.config import settings
from orderdesk.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from orderdesk.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderdesk.infrastructure.persistence.json_settings_repository import (
    JsonOrderNumberSequence,
    JsonSettingsRepository,
)
from orderdesk.infrastructure.persistence.json_store import JsonRecordStore


def record_store(data_dir: Path | None = None) -> JsonRecordStore:
    return JsonRecordStore(data_dir or settings.data_dir)


def customer_repository(store: JsonRecordStore) -> JsonCustomerRepository:
    return JsonCustomerRepository(store)


def order_repository(store: JsonRecordStore) -> JsonOrderRepository:
    return JsonOrderRepository(store)


def settings_repository(store: JsonRecordStore) -> JsonSettingsRepository:
    return JsonSettingsRepository(store)


def order_number_sequence(store: JsonRecordStore) -> JsonOrderNumberSequence:
    return JsonOrderNumberSequence(store)
