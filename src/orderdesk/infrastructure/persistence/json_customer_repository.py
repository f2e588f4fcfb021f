"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from datetime import datetime

from orderdesk.domain.model.customer import Customer
from orderdesk.domain.model.value_objects import new_id
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.infrastructure.persistence.json_store import JsonRecordStore

ENTITY = "customers"


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, store: JsonRecordStore) -> None:
        self._store = store

    # --- CustomerRepository interface -----------------------------------------

    def get_by_id(self, customer_id: str) -> Customer | None:
        raw = self._store.get_by_id(ENTITY, customer_id)
        return None if raw is None else self._to_domain(raw)

    def list_all(self) -> list[Customer]:
        return [self._to_domain(raw) for raw in self._store.get_all(ENTITY)]

    def add(self, customer: Customer) -> None:
        if customer.id is None:
            customer.id = new_id()
        self._store.insert(ENTITY, self._to_raw(customer))

    def update(self, customer: Customer) -> None:
        self._store.update(ENTITY, self._to_raw(customer))

    def delete(self, customer_id: str) -> bool:
        return self._store.delete_by_id(ENTITY, customer_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "name": customer.name,
            "phone": customer.phone,
            "email": customer.email,
            "address": customer.address,
            "created_at": customer.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw["name"],
            phone=raw.get("phone"),
            email=raw.get("email"),
            address=raw.get("address"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
