"""Reading order drafts from JSON files.

A draft file looks like::

    {
      "customer_id": "…",
      "date": "2024-05-01",
      "currency": "USD",
      "tax_rate": 20,
      "notes": "",
      "discounts": [{"kind": "percentage", "value": 10, "description": "Loyalty"}],
      "sections": [
        {"name": "Living room",
         "items": [{"name": "Curtain", "quantity": 2, "unit": "M2",
                    "unit_price": 100, "price_currency": "TRY"}]}
      ]
    }
"""

from __future__ import annotations

from datetime import date

from orderdesk.application.dto import DiscountSpec, OrderDraft, OrderItemSpec, SectionSpec
from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.value_objects import (
    CANONICAL_CURRENCY,
    parse_currency,
    to_decimal,
)


def draft_from_dict(raw: dict, customer_id: str | None = None) -> OrderDraft:
    if not isinstance(raw, dict):
        raise ValidationError("Order draft must be a JSON object")
    tax_rate = raw.get("tax_rate")
    return OrderDraft(
        customer_id=customer_id or raw.get("customer_id") or "",
        date=_parse_date(raw.get("date")),
        currency=parse_currency(raw.get("currency") or CANONICAL_CURRENCY),
        sections=[_section(s, i) for i, s in _entries(raw, "sections", "Draft")],
        discounts=[_discount(d) for _, d in _entries(raw, "discounts", "Draft")],
        tax_rate=None if tax_rate in (None, "") else to_decimal(tax_rate),
        notes=raw.get("notes") or "",
        status=raw.get("status"),
    )


def _parse_date(value) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)") from exc


def _entries(raw: dict, key: str, where: str) -> list[tuple[int, dict]]:
    """The numbered objects of list ``raw[key]``; anything else is rejected."""
    value = raw.get(key) or []
    if not isinstance(value, list):
        raise ValidationError(f"{where}: '{key}' must be a JSON list")
    for number, entry in enumerate(value, start=1):
        if not isinstance(entry, dict):
            raise ValidationError(f"{where}: {key} entry {number} must be a JSON object")
    return list(enumerate(value, start=1))


def _section(raw: dict, number: int) -> SectionSpec:
    where = f"Section {number}"
    return SectionSpec(
        id=raw.get("id"),
        name=raw.get("name") or "",
        items=[_item(item) for _, item in _entries(raw, "items", where)],
    )


def _item(raw: dict) -> OrderItemSpec:
    return OrderItemSpec(
        id=raw.get("id"),
        name=raw.get("name") or "",
        description=raw.get("description"),
        quantity=to_decimal(raw.get("quantity", 0)),
        unit=raw.get("unit") or "",
        unit_price=to_decimal(raw.get("unit_price", 0)),
        price_currency=parse_currency(raw.get("price_currency") or CANONICAL_CURRENCY),
    )


def _discount(raw: dict) -> DiscountSpec:
    return DiscountSpec(
        id=raw.get("id"),
        kind=raw.get("kind") or "",
        value=to_decimal(raw.get("value", 0)),
        description=raw.get("description"),
    )
