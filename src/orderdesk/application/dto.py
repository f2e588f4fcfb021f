"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Monetary values stay
``Decimal`` in the canonical currency; formatting is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from orderdesk.domain.model.customer import Customer
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.value_objects import CANONICAL_CURRENCY, Currency

# --- Input ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one line item as entered by the user.

    ``unit_price`` is expressed in ``price_currency``; anything other than
    the canonical currency is converted with the current global rates.
    """

    name: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    description: str | None = None
    price_currency: Currency = CANONICAL_CURRENCY
    id: str | None = None


@dataclass(frozen=True)
class SectionSpec:
    name: str
    items: list[OrderItemSpec]
    id: str | None = None


@dataclass(frozen=True)
class DiscountSpec:
    kind: str  # "percentage" | "amount"
    value: Decimal
    description: str | None = None
    id: str | None = None


@dataclass(frozen=True)
class OrderDraft:
    """Input: everything the user filled in on the order form."""

    customer_id: str
    date: date | None
    sections: list[SectionSpec]
    currency: Currency = CANONICAL_CURRENCY
    discounts: list[DiscountSpec] = field(default_factory=list)
    tax_rate: Decimal | None = None
    notes: str = ""
    status: str | None = None


# --- Output -----------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    name: str
    description: str | None
    quantity: Decimal
    unit: str
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderSectionDTO:
    name: str
    items: list[OrderLineItemDTO]
    total: Decimal


@dataclass(frozen=True)
class DiscountDTO:
    kind: str
    value: Decimal
    description: str | None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    order_number: str
    customer_id: str
    customer_name: str
    date: str
    status: str
    status_label: str
    currency: str
    exchange_rates: dict[str, str | None]
    notes: str
    sections: list[OrderSectionDTO]
    discounts: list[DiscountDTO]
    tax_rate: Decimal | None
    items_total: Decimal
    total_discount_amount: Decimal
    subtotal_after_discounts: Decimal
    tax_amount: Decimal
    grand_total: Decimal


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    phone: str | None
    email: str | None
    address: str | None
    created_at: str


# --- Mapping ----------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    fin = order.financials
    rates = order.exchange_rates_snapshot
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        customer_name=order.customer_name_snapshot,
        date=order.date.isoformat(),
        status=order.status.value,
        status_label=order.status.label,
        currency=order.currency.value,
        exchange_rates={
            "USD": None if rates.usd is None else str(rates.usd),
            "EUR": None if rates.eur is None else str(rates.eur),
        },
        notes=order.notes,
        sections=[
            OrderSectionDTO(
                name=section.name,
                items=[
                    OrderLineItemDTO(
                        name=item.name,
                        description=item.description,
                        quantity=item.quantity,
                        unit=item.unit,
                        unit_price=item.unit_price,
                        line_total=item.line_total,
                    )
                    for item in section.items
                ],
                total=sum((item.line_total for item in section.items), Decimal("0")),
            )
            for section in order.sections
        ],
        discounts=[
            DiscountDTO(kind=d.kind.value, value=d.value, description=d.description)
            for d in order.discounts
        ],
        tax_rate=order.tax_rate,
        items_total=fin.items_total,
        total_discount_amount=fin.total_discount_amount,
        subtotal_after_discounts=fin.subtotal_after_discounts,
        tax_amount=fin.tax_amount,
        grand_total=fin.grand_total,
    )


def customer_to_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,  # type: ignore[arg-type]
        name=customer.name,
        phone=customer.phone,
        email=customer.email,
        address=customer.address,
        created_at=customer.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
