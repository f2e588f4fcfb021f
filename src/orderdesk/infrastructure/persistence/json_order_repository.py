"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from orderdesk.domain.financials import OrderFinancials
from orderdesk.domain.model.order import (
    Discount,
    Order,
    OrderSection,
    OrderStatus,
    ProductItem,
)
from orderdesk.domain.model.value_objects import Currency, DiscountKind, new_id
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.infrastructure.persistence.codecs import (
    dec_from_raw,
    dec_to_raw,
    rates_from_raw,
    rates_to_raw,
)
from orderdesk.infrastructure.persistence.json_store import JsonRecordStore

ENTITY = "orders"


class JsonOrderRepository(OrderRepository):

    def __init__(self, store: JsonRecordStore) -> None:
        self._store = store

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._store.get_by_id(ENTITY, order_id)
        return None if raw is None else self._to_domain(raw)

    def get_by_number(self, order_number: str) -> Order | None:
        for raw in self._store.get_all(ENTITY):
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._store.get_all(ENTITY)]

    def add(self, order: Order) -> None:
        if order.id is None:
            order.id = new_id()
        self._store.insert(ENTITY, self._to_raw(order))

    def update(self, order: Order) -> None:
        self._store.update(ENTITY, self._to_raw(order))

    def delete(self, order_id: str) -> bool:
        return self._store.delete_by_id(ENTITY, order_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        fin = order.financials
        return {
            "id": order.id,
            "order_number": order.order_number,
            "customer_id": order.customer_id,
            "customer_name_snapshot": order.customer_name_snapshot,
            "date": order.date.isoformat(),
            "currency": order.currency.value,
            "exchange_rates_snapshot": rates_to_raw(order.exchange_rates_snapshot),
            "status": order.status.value,
            "notes": order.notes,
            "sections": [
                {
                    "id": section.id,
                    "name": section.name,
                    "items": [
                        {
                            "id": item.id,
                            "name": item.name,
                            "description": item.description,
                            "quantity": str(item.quantity),
                            "unit": item.unit,
                            "unit_price": str(item.unit_price),
                        }
                        for item in section.items
                    ],
                }
                for section in order.sections
            ],
            "discounts": [
                {
                    "id": d.id,
                    "description": d.description,
                    "kind": d.kind.value,
                    "value": str(d.value),
                }
                for d in order.discounts
            ],
            "tax_rate": dec_to_raw(order.tax_rate),
            "items_total": str(fin.items_total),
            "total_discount_amount": str(fin.total_discount_amount),
            "subtotal_after_discounts": str(fin.subtotal_after_discounts),
            "tax_amount": str(fin.tax_amount),
            "grand_total": str(fin.grand_total),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        sections = [
            OrderSection(
                id=s["id"],
                name=s["name"],
                items=[
                    ProductItem(
                        id=i["id"],
                        name=i["name"],
                        description=i.get("description"),
                        quantity=Decimal(i["quantity"]),
                        unit=i["unit"],
                        unit_price=Decimal(i["unit_price"]),
                    )
                    for i in s["items"]
                ],
            )
            for s in raw["sections"]
        ]
        discounts = [
            Discount(
                id=d["id"],
                kind=DiscountKind(d["kind"]),
                value=Decimal(d["value"]),
                description=d.get("description"),
            )
            for d in raw.get("discounts") or []
        ]
        # Stored totals are read back as written; they are only ever
        # recomputed by an explicit update of the order.
        financials = OrderFinancials(
            items_total=Decimal(raw["items_total"]),
            total_discount_amount=Decimal(raw["total_discount_amount"]),
            subtotal_after_discounts=Decimal(raw["subtotal_after_discounts"]),
            tax_amount=Decimal(raw.get("tax_amount") or "0.00"),
            grand_total=Decimal(raw["grand_total"]),
        )
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_id=raw["customer_id"],
            customer_name_snapshot=raw["customer_name_snapshot"],
            date=date.fromisoformat(raw["date"]),
            sections=sections,
            currency=Currency(raw["currency"]),
            exchange_rates_snapshot=rates_from_raw(raw.get("exchange_rates_snapshot")),
            status=OrderStatus(raw["status"]),
            notes=raw.get("notes") or "",
            discounts=discounts,
            tax_rate=dec_from_raw(raw.get("tax_rate")),
            financials=financials,
        )
