"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
The steps run strictly one after another: snapshots are resolved,
totals computed, the order record written, and only then is the number
counter advanced and the suggestion index fed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from orderdesk.application.dto import (
    DiscountSpec,
    OrderDraft,
    OrderDTO,
    SectionSpec,
    order_to_dto,
)
from orderdesk.application.suggestions import SuggestionIndex
from orderdesk.domain.currency import to_canonical
from orderdesk.domain.model.order import (
    UNKNOWN_CUSTOMER,
    Discount,
    Order,
    OrderSection,
    OrderStatus,
    ProductItem,
    format_order_number,
    parse_discount_kind,
    parse_status,
)
from orderdesk.domain.model.value_objects import ExchangeRates, new_id, to_decimal
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_number_sequence import OrderNumberSequence
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        settings_repo: SettingsRepository,
        sequence: OrderNumberSequence,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._settings_repo = settings_repo
        self._sequence = sequence
        self._clock = clock

    def handle(self, draft: OrderDraft) -> OrderDTO:
        """Create a new order from a draft.

        Steps:
        1. Validate the draft and build the Order (nothing written yet).
        2. Snapshot the customer's name and the current global rates.
        3. Compute the totals.
        4. Reserve a number, write the order, advance the counter.
        5. Feed product names/descriptions into the suggestion index.
        """
        rates = self._settings_repo.get_exchange_rates()

        order = Order.create(
            customer_id=draft.customer_id,
            order_date=draft.date,
            sections=build_sections(draft.sections, rates),
            currency=draft.currency,
            discounts=build_discounts(draft.discounts),
            tax_rate=None if draft.tax_rate is None else to_decimal(draft.tax_rate),
            notes=draft.notes or "",
            status=parse_status(draft.status) if draft.status else OrderStatus.QUOTATION,
        )

        customer = self._customer_repo.get_by_id(order.customer_id)
        order.take_snapshots(customer.name if customer else UNKNOWN_CUSTOMER, rates)
        order.recalculate()

        with self._sequence.reserve() as sequence:
            order.order_number = format_order_number(self._clock().year, sequence)
            self._order_repo.add(order)

        logger.info(
            "Created order %s for %s (grand total %s)",
            order.order_number,
            order.customer_name_snapshot,
            order.financials.grand_total,
        )

        SuggestionIndex(self._settings_repo).record_order(order)

        return order_to_dto(order)


# --- Draft mapping (shared with UpdateOrderHandler) --------------------------


def build_sections(specs: list[SectionSpec], rates: ExchangeRates) -> list[OrderSection]:
    """Turn section specs into domain sections with canonical unit prices."""
    return [
        OrderSection(
            id=spec.id or new_id(),
            name=spec.name.strip() if spec.name else "",
            items=[
                ProductItem(
                    id=item.id or new_id(),
                    name=item.name.strip() if item.name else "",
                    quantity=to_decimal(item.quantity),
                    unit=item.unit.strip() if item.unit else "",
                    unit_price=to_canonical(
                        to_decimal(item.unit_price), item.price_currency, rates
                    ),
                    description=(item.description or "").strip() or None,
                )
                for item in spec.items
            ],
        )
        for spec in specs
    ]


def build_discounts(specs: list[DiscountSpec]) -> list[Discount]:
    return [
        Discount(
            id=spec.id or new_id(),
            kind=parse_discount_kind(spec.kind),
            value=to_decimal(spec.value),
            description=(spec.description or "").strip() or None,
        )
        for spec in specs
    ]
