"""Application services: single and bulk order status changes.

A status change touches nothing but the status: totals, snapshots and
the order number stay exactly as they were persisted.  Transitions are
not restricted.
"""

from __future__ import annotations

import logging

from orderdesk.domain.exceptions import (
    BulkStatusUpdateError,
    EntityNotFoundError,
    PersistenceError,
)
from orderdesk.domain.model.order import OrderStatus, parse_status
from orderdesk.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, status: str | OrderStatus) -> None:
        new_status = parse_status(status)
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        previous = order.status
        order.change_status(new_status)
        self._order_repo.update(order)
        logger.info(
            "Order %s status %s -> %s",
            order.order_number,
            previous.value,
            new_status.value,
        )


class BulkUpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_ids: list[str], status: str | OrderStatus) -> list[str]:
        """Apply *status* to every order, one at a time.

        Every ID is attempted.  Returns the IDs that were updated; if any
        failed, raises BulkStatusUpdateError listing them after the loop.
        """
        new_status = parse_status(status)
        single = UpdateOrderStatusHandler(self._order_repo)

        updated: list[str] = []
        failures: dict[str, str] = {}
        for order_id in dict.fromkeys(order_ids):
            try:
                single.handle(order_id, new_status)
            except (EntityNotFoundError, PersistenceError) as exc:
                failures[order_id] = str(exc)
            else:
                updated.append(order_id)

        if failures:
            logger.warning(
                "Bulk status change to %s: %d updated, %d failed",
                new_status.value,
                len(updated),
                len(failures),
            )
            raise BulkStatusUpdateError(failures)
        return updated
