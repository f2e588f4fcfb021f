"""Per-invocation state shared by all CLI commands."""

from __future__ import annotations

from pathlib import Path

from orderdesk.infrastructure import bootstrap
from orderdesk.infrastructure.persistence.json_store import JsonRecordStore


class CliContext:
    """Holds the data directory and opens the record store on first use."""

    def __init__(self, data_dir: Path | None = None) -> None:
        self.data_dir = data_dir
        self._store: JsonRecordStore | None = None

    @property
    def store(self) -> JsonRecordStore:
        if self._store is None:
            self._store = bootstrap.record_store(self.data_dir)
        return self._store

    def customer_repository(self):
        return bootstrap.customer_repository(self.store)

    def order_repository(self):
        return bootstrap.order_repository(self.store)

    def settings_repository(self):
        return bootstrap.settings_repository(self.store)

    def order_number_sequence(self):
        return bootstrap.order_number_sequence(self.store)
