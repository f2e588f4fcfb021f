"""JSON-file-backed record store.

A generic gateway keyed by entity type and record ID, plus a small
key-value settings store.  Each entity type lives in its own JSON file
(a list of records); settings live in ``settings.json`` (an object).
Files are replaced atomically on every write.

The store knows nothing about the shape of the records: nested order
structures are stored as whatever JSON the repositories hand it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from orderdesk.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)

ENTITY_TYPES = ("customers", "orders")
SETTINGS_FILE = "settings.json"


class JsonRecordStore:

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._ensure_files()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    # --- Records --------------------------------------------------------------

    def get_all(self, entity: str) -> list[dict]:
        return self._load_records(entity)

    def get_by_id(self, entity: str, record_id: str) -> dict | None:
        for raw in self._load_records(entity):
            if raw.get("id") == record_id:
                return raw
        return None

    def insert(self, entity: str, data: dict) -> dict:
        records = self._load_records(entity)
        record_id = data.get("id")
        if not record_id:
            raise PersistenceError(f"Cannot insert into {entity}: record has no id")
        if any(raw.get("id") == record_id for raw in records):
            raise PersistenceError(f"Cannot insert into {entity}: id {record_id} already exists")
        records.append(data)
        self._persist_records(entity, records)
        return data

    def update(self, entity: str, data: dict) -> dict:
        records = self._load_records(entity)
        for i, raw in enumerate(records):
            if raw.get("id") == data.get("id"):
                records[i] = data
                self._persist_records(entity, records)
                return data
        raise PersistenceError(f"Cannot update {entity}: id {data.get('id')} does not exist")

    def delete_by_id(self, entity: str, record_id: str) -> bool:
        records = self._load_records(entity)
        remaining = [raw for raw in records if raw.get("id") != record_id]
        if len(remaining) == len(records):
            return False
        self._persist_records(entity, remaining)
        return True

    # --- Settings -------------------------------------------------------------

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self._read(self._settings_path()).get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        settings = self._read(self._settings_path())
        settings[key] = value
        self._write(self._settings_path(), settings)

    # --- File helpers ---------------------------------------------------------

    def _entity_path(self, entity: str) -> Path:
        if entity not in ENTITY_TYPES:
            raise PersistenceError(f"Unknown entity type: {entity!r}")
        return self._data_dir / f"{entity}.json"

    def _settings_path(self) -> Path:
        return self._data_dir / SETTINGS_FILE

    def _load_records(self, entity: str) -> list[dict]:
        return self._read(self._entity_path(entity))

    def _persist_records(self, entity: str, records: list[dict]) -> None:
        self._write(self._entity_path(entity), records)

    @staticmethod
    def _read(path: Path) -> Any:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Could not read {path.name}: {exc}") from exc

    @staticmethod
    def _write(path: Path, payload: Any) -> None:
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
            os.replace(tmp_path, path)
        except OSError as exc:
            raise PersistenceError(f"Could not write {path.name}: {exc}") from exc
        logger.debug("Wrote %s", path)

    def _ensure_files(self) -> None:
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            for entity in ENTITY_TYPES:
                path = self._entity_path(entity)
                if not path.exists():
                    path.write_text("[]", encoding="utf-8")
            if not self._settings_path().exists():
                self._settings_path().write_text("{}", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Could not prepare data directory {self._data_dir}: {exc}") from exc
