"""Financial computation engine.

Turns an order's sections, discounts and tax rate into the five canonical
totals.  Deterministic and side-effect free; it never raises for numeric
input and only clamps a discount against the running balance.  Non-finite
input (NaN, Infinity) propagates into the totals instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, Overflow, localcontext
from typing import TYPE_CHECKING

from orderdesk.domain.model.value_objects import DiscountKind

if TYPE_CHECKING:
    from orderdesk.domain.model.order import Discount, OrderSection, ProductItem

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")
WORKING_PRECISION = 50


@dataclass(frozen=True)
class OrderFinancials:
    """The derived totals of an order, all in the canonical currency."""

    items_total: Decimal
    total_discount_amount: Decimal
    subtotal_after_discounts: Decimal
    tax_amount: Decimal
    grand_total: Decimal

    @staticmethod
    def zero() -> OrderFinancials:
        z = Decimal("0.00")
        return OrderFinancials(z, z, z, z, z)


def line_total(item: ProductItem) -> Decimal:
    return item.quantity * item.unit_price


def section_total(section: OrderSection) -> Decimal:
    return sum((line_total(item) for item in section.items), ZERO)


@dataclass(frozen=True)
class AppliedDiscount:
    """A discount together with the amount it actually took off."""

    discount: Discount
    amount: Decimal


def apply_discounts(
    items_total: Decimal, discounts: Iterable[Discount]
) -> tuple[Decimal, list[AppliedDiscount]]:
    """Apply *discounts* in order against a running balance.

    Each percentage discount is taken from what is left after the
    previous ones, and no discount may take more than what is left.
    Returns the remaining balance and the amount applied per discount.
    """
    running = items_total
    applied: list[AppliedDiscount] = []
    for discount in discounts:
        if discount.kind is DiscountKind.PERCENTAGE:
            amount = running * discount.value / HUNDRED
        else:
            amount = discount.value
        amount = min(amount, running)
        running -= amount
        applied.append(AppliedDiscount(discount=discount, amount=amount))
    return running, applied


def compute_financials(
    sections: Iterable[OrderSection],
    discounts: Iterable[Discount],
    tax_rate: Decimal | None = None,
) -> OrderFinancials:
    """Compute the order totals in the canonical currency.

    Rounding to cents (half-up) happens once, at the very end, so no
    rounding error accumulates across intermediate steps.
    """
    with localcontext() as ctx:
        ctx.prec = WORKING_PRECISION
        # NaN arithmetic and comparisons yield NaN or False, overflow yields
        # Infinity, instead of raising
        ctx.traps[InvalidOperation] = False
        ctx.traps[Overflow] = False

        items_total = sum((section_total(section) for section in sections), ZERO)
        subtotal, applied = apply_discounts(items_total, discounts)
        total_discount = sum((a.amount for a in applied), ZERO)

        tax_amount = ZERO
        if tax_rate is not None and tax_rate > 0:
            tax_amount = subtotal * tax_rate / HUNDRED

        grand_total = subtotal + tax_amount

        return OrderFinancials(
            items_total=round_cents(items_total),
            total_discount_amount=round_cents(total_discount),
            subtotal_after_discounts=round_cents(subtotal),
            tax_amount=round_cents(tax_amount),
            grand_total=round_cents(grand_total),
        )


def round_cents(value: Decimal) -> Decimal:
    """Quantize to two places, half-up, widening precision as needed.

    Values that cannot be quantized (non-finite, or beyond the exponent
    range) are returned unchanged.
    """
    if not value.is_finite():
        return value
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        ctx.traps[InvalidOperation] = False
        rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    return value if rounded.is_nan() else rounded
