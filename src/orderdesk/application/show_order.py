"""Application services: Show Order / List Orders (queries)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from orderdesk.application.dto import OrderDTO, order_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.model.order import Order, OrderStatus, parse_order_number
from orderdesk.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, reference: str) -> OrderDTO:
        """Look an order up by its number (``ORD-2024-0007``) or by its ID."""
        order = None
        try:
            parse_order_number(reference)
        except ValidationError:
            order = self._order_repo.get_by_id(reference)
        else:
            order = self._order_repo.get_by_number(reference.strip())
        if order is None:
            raise EntityNotFoundError(f"Order {reference} not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        statuses: Iterable[OrderStatus] | None = None,
        customer_id: str | None = None,
        search: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[OrderDTO]:
        """Return orders newest first, optionally filtered.

        ``search`` is a case-insensitive substring match on the order number
        or the customer name snapshot.  An empty ``statuses`` means any
        status.  Both date bounds are inclusive.
        """
        if date_from is not None and date_to is not None and date_from > date_to:
            raise ValidationError("Start date must not be after end date")
        orders = self._order_repo.list_all()
        wanted = set(statuses or ())
        if wanted:
            orders = [o for o in orders if o.status in wanted]
        if customer_id is not None:
            orders = [o for o in orders if o.customer_id == customer_id]
        if search and search.strip():
            needle = search.strip().casefold()
            orders = [o for o in orders if _matches(o, needle)]
        if date_from is not None:
            orders = [o for o in orders if o.date is not None and o.date >= date_from]
        if date_to is not None:
            orders = [o for o in orders if o.date is not None and o.date <= date_to]
        orders.sort(key=lambda o: o.date or date.min, reverse=True)
        return [order_to_dto(o) for o in orders]


def _matches(order: Order, needle: str) -> bool:
    return needle in (order.order_number or "").casefold() or needle in (
        order.customer_name_snapshot or ""
    ).casefold()
