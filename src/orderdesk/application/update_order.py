"""Application service: Update Order use case.

An update is the only operation that refreshes an order's snapshots: the
customer name and the exchange-rate table are re-read from their current
state, the totals are recomputed from scratch, and the order keeps its ID
and number.
"""

from __future__ import annotations

import logging

from orderdesk.application.create_order import build_discounts, build_sections
from orderdesk.application.dto import OrderDraft, OrderDTO, order_to_dto
from orderdesk.application.suggestions import SuggestionIndex
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.order import UNKNOWN_CUSTOMER, parse_status
from orderdesk.domain.model.value_objects import to_decimal
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        settings_repo: SettingsRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._settings_repo = settings_repo

    def handle(self, order_id: str, draft: OrderDraft) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        rates = self._settings_repo.get_exchange_rates()
        previous_customer_id = order.customer_id
        previous_name = order.customer_name_snapshot

        order.revise(
            customer_id=draft.customer_id,
            order_date=draft.date,
            sections=build_sections(draft.sections, rates),
            currency=draft.currency,
            discounts=build_discounts(draft.discounts),
            tax_rate=None if draft.tax_rate is None else to_decimal(draft.tax_rate),
            notes=draft.notes or "",
            status=parse_status(draft.status) if draft.status else None,
        )

        if order.customer_id == previous_customer_id:
            fallback = previous_name
        else:
            fallback = UNKNOWN_CUSTOMER
        customer = self._customer_repo.get_by_id(order.customer_id)
        order.take_snapshots(customer.name if customer else fallback, rates)
        order.recalculate()
        self._order_repo.update(order)

        logger.info(
            "Updated order %s (grand total %s)",
            order.order_number,
            order.financials.grand_total,
        )

        SuggestionIndex(self._settings_repo).record_order(order)

        return order_to_dto(order)

