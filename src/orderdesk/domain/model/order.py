"""Order aggregate, with its sections, line items and discounts.

The Order is an aggregate root that owns its sections, line items and
discounts.  Its monetary totals are always derived from those through the
financial engine; they are never set by hand.

Two fields are deliberate snapshots: ``customer_name_snapshot`` and
``exchange_rates_snapshot`` are copied in when the order is written and do
not follow later changes to the customer or to the global rate table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.financials import OrderFinancials, compute_financials, line_total
from orderdesk.domain.model.value_objects import (
    Currency,
    DiscountKind,
    ExchangeRates,
)


class OrderStatus(Enum):
    QUOTATION = "Quotation"
    PENDING = "Pending"
    PREPARING = "Preparing"
    DELIVERED = "Delivered"
    DELIVERED_PENDING_PAYMENT = "DeliveredPendingPayment"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    OrderStatus.QUOTATION: "Teklif",
    OrderStatus.PENDING: "Beklemede",
    OrderStatus.PREPARING: "Hazırlanıyor",
    OrderStatus.DELIVERED: "Teslim Edildi",
    OrderStatus.DELIVERED_PENDING_PAYMENT: "Teslim Edildi (Ödeme Bekliyor)",
    OrderStatus.COMPLETED: "Tamamlandı",
    OrderStatus.CANCELLED: "İptal Edildi",
}


def parse_status(value: str | OrderStatus) -> OrderStatus:
    """Accept a status by value ("DeliveredPendingPayment") or name."""
    if isinstance(value, OrderStatus):
        return value
    text = value.strip()
    for status in OrderStatus:
        if text.lower() in (status.value.lower(), status.name.lower()):
            return status
    raise ValidationError(f"Unknown order status: {value!r}")


def parse_discount_kind(value: str | DiscountKind) -> DiscountKind:
    if isinstance(value, DiscountKind):
        return value
    try:
        return DiscountKind(value.strip().lower())
    except ValueError as exc:
        raise ValidationError(
            f"Unknown discount type {value!r} (expected 'percentage' or 'amount')"
        ) from exc


@dataclass
class ProductItem:
    """A line item.  ``unit_price`` is always in the canonical currency."""

    id: str
    name: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    description: str | None = None

    @property
    def line_total(self) -> Decimal:
        return line_total(self)


@dataclass
class OrderSection:
    id: str
    name: str
    items: list[ProductItem]


@dataclass(frozen=True)
class Discount:
    id: str
    kind: DiscountKind
    value: Decimal
    description: str | None = None


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
ORDER_NUMBER_PREFIX = "ORD"
UNKNOWN_CUSTOMER = "Unknown Customer"

_ORDER_NUMBER_RE = re.compile(rf"^{ORDER_NUMBER_PREFIX}-(\d{{4}})-(\d{{4,}})$")


def format_order_number(year: int, sequence: int) -> str:
    """``ORD-2024-0007``: prefix, 4-digit year, 4-digit zero-padded sequence."""
    return f"{ORDER_NUMBER_PREFIX}-{year:04d}-{sequence:04d}"


def parse_order_number(text: str) -> tuple[int, int]:
    """Split an order number into ``(year, sequence)``."""
    match = _ORDER_NUMBER_RE.match(text.strip())
    if match is None:
        raise ValidationError(f"Invalid order number: {text!r}")
    return int(match.group(1)), int(match.group(2))


@dataclass
class Order:
    """Aggregate root for orders and quotations.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str | None
    order_number: str | None
    customer_id: str
    customer_name_snapshot: str
    date: date
    sections: list[OrderSection]
    currency: Currency
    exchange_rates_snapshot: ExchangeRates
    status: OrderStatus = OrderStatus.QUOTATION
    notes: str = ""
    discounts: list[Discount] = field(default_factory=list)
    tax_rate: Decimal | None = None
    financials: OrderFinancials = field(default_factory=OrderFinancials.zero)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str,
        order_date: date | None,
        sections: list[OrderSection],
        currency: Currency,
        discounts: list[Discount],
        tax_rate: Decimal | None = None,
        notes: str = "",
        status: OrderStatus = OrderStatus.QUOTATION,
    ) -> Order:
        """Create a new order, enforcing all invariants.

        Snapshots and totals are filled in by ``take_snapshots()`` and
        ``recalculate()``; the order number is minted on persistence.
        """
        _validate_contents(customer_id, order_date, sections, discounts, tax_rate)
        return Order(
            id=None,
            order_number=None,
            customer_id=customer_id.strip(),
            customer_name_snapshot=UNKNOWN_CUSTOMER,
            date=order_date,  # type: ignore[arg-type]
            sections=list(sections),
            currency=currency,
            exchange_rates_snapshot=ExchangeRates(usd=None, eur=None),
            status=status,
            notes=notes,
            discounts=list(discounts),
            tax_rate=tax_rate,
        )

    # --- Mutations ------------------------------------------------------------

    def revise(
        self,
        customer_id: str,
        order_date: date | None,
        sections: list[OrderSection],
        currency: Currency,
        discounts: list[Discount],
        tax_rate: Decimal | None = None,
        notes: str = "",
        status: OrderStatus | None = None,
    ) -> None:
        """Replace the editable contents of an existing order.

        ``id`` and ``order_number`` are never touched.  Everything is
        validated before anything is assigned.
        """
        _validate_contents(customer_id, order_date, sections, discounts, tax_rate)
        self.customer_id = customer_id.strip()
        self.date = order_date  # type: ignore[assignment]
        self.sections = list(sections)
        self.currency = currency
        self.discounts = list(discounts)
        self.tax_rate = tax_rate
        self.notes = notes
        if status is not None:
            self.status = status

    def take_snapshots(self, customer_name: str, rates: ExchangeRates) -> None:
        """Freeze the customer's name and the rate table into the order."""
        self.customer_name_snapshot = customer_name
        self.exchange_rates_snapshot = rates

    def recalculate(self) -> None:
        self.financials = compute_financials(self.sections, self.discounts, self.tax_rate)

    def change_status(self, status: OrderStatus) -> None:
        """Set the status.

        Any transition is allowed, including moving a completed order back
        to a quotation; the user decides.
        """
        self.status = status

    # --- Computed properties --------------------------------------------------

    def iter_items(self):
        for section in self.sections:
            yield from section.items

    @property
    def grand_total(self) -> Decimal:
        return self.financials.grand_total


# --- Validation ---------------------------------------------------------------


def _validate_contents(
    customer_id: str,
    order_date: date | None,
    sections: list[OrderSection],
    discounts: list[Discount],
    tax_rate: Decimal | None,
) -> None:
    if not customer_id or not customer_id.strip():
        raise ValidationError("Customer is required")

    if order_date is None:
        raise ValidationError("Order date is required")

    if not sections:
        raise ValidationError("Order must contain at least one section")

    for s_idx, section in enumerate(sections, start=1):
        if not section.name or not section.name.strip():
            raise ValidationError(f"Section {s_idx} name is required")
        if not section.items:
            raise ValidationError(f"Section {s_idx} must contain at least one item")
        for p_idx, item in enumerate(section.items, start=1):
            where = f"Section {s_idx}, item {p_idx}"
            if not item.name or not item.name.strip():
                raise ValidationError(f"{where}: product name is required")
            if not item.quantity.is_finite() or not item.unit_price.is_finite():
                raise ValidationError(f"{where}: quantity and price must be finite numbers")
            if item.quantity <= 0:
                raise ValidationError(f"{where}: quantity must be positive")
            if item.unit_price < 0:
                raise ValidationError(f"{where}: price cannot be negative")
            if not item.unit or not item.unit.strip():
                raise ValidationError(f"{where}: unit is required")

    for d_idx, discount in enumerate(discounts, start=1):
        if not discount.value.is_finite():
            raise ValidationError(f"Discount {d_idx} must be a finite number")
        if discount.value < 0:
            raise ValidationError(f"Discount {d_idx} cannot be negative")
        if discount.kind is DiscountKind.PERCENTAGE and discount.value > 100:
            raise ValidationError(f"Discount {d_idx} cannot exceed 100%")

    if tax_rate is not None and not tax_rate.is_finite():
        raise ValidationError("Tax rate must be a finite number")
    if tax_rate is not None and tax_rate < 0:
        raise ValidationError("Tax rate cannot be negative")
