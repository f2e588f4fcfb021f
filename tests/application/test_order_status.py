"""Tests for single and bulk status changes, and order deletion."""

from datetime import date
from decimal import Decimal

import pytest

from orderdesk.application.delete_order import DeleteOrderHandler
from orderdesk.application.update_order_status import (
    BulkUpdateOrderStatusHandler,
    UpdateOrderStatusHandler,
)
from orderdesk.domain.exceptions import (
    BulkStatusUpdateError,
    EntityNotFoundError,
    ValidationError,
)
from orderdesk.domain.model.order import Order, OrderSection, OrderStatus, ProductItem
from orderdesk.domain.model.value_objects import INITIAL_EXCHANGE_RATES, Currency
from tests.fakes import FakeOrderRepository


def _order(number: str) -> Order:
    order = Order.create(
        customer_id="c1",
        order_date=date(2024, 5, 1),
        sections=[OrderSection(id="s", name="Salon", items=[
            ProductItem(id="i", name="Stor", quantity=Decimal("1"), unit="Adet", unit_price=Decimal("80")),
        ])],
        currency=Currency.TRY,
        discounts=[],
    )
    order.order_number = number
    order.take_snapshots("Ayşe", INITIAL_EXCHANGE_RATES)
    order.recalculate()
    return order


def _setup(count: int = 3) -> FakeOrderRepository:
    repo = FakeOrderRepository()
    for n in range(1, count + 1):
        repo.add(_order(f"ORD-2024-{n:04d}"))
    return repo


class TestUpdateOrderStatus:

    def test_changes_status_only(self):
        repo = _setup(1)
        before = repo.get_by_id("order-1")
        UpdateOrderStatusHandler(repo).handle("order-1", "Completed")
        after = repo.get_by_id("order-1")
        assert after.status is OrderStatus.COMPLETED
        assert after.financials == before.financials
        assert after.order_number == before.order_number
        assert after.customer_name_snapshot == before.customer_name_snapshot

    def test_backwards_transition(self):
        repo = _setup(1)
        handler = UpdateOrderStatusHandler(repo)
        handler.handle("order-1", OrderStatus.CANCELLED)
        handler.handle("order-1", OrderStatus.QUOTATION)
        assert repo.get_by_id("order-1").status is OrderStatus.QUOTATION

    def test_not_found(self):
        with pytest.raises(EntityNotFoundError):
            UpdateOrderStatusHandler(_setup(0)).handle("nope", "Pending")

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            UpdateOrderStatusHandler(_setup(1)).handle("order-1", "Lost")


class TestBulkUpdateOrderStatus:

    def test_updates_all(self):
        repo = _setup()
        updated = BulkUpdateOrderStatusHandler(repo).handle(
            ["order-1", "order-2", "order-3"], "Preparing"
        )
        assert updated == ["order-1", "order-2", "order-3"]
        assert {o.status for o in repo.list_all()} == {OrderStatus.PREPARING}

    def test_failures_reported_after_every_attempt(self):
        repo = _setup()
        with pytest.raises(BulkStatusUpdateError) as excinfo:
            BulkUpdateOrderStatusHandler(repo).handle(
                ["order-1", "ghost", "order-3"], "Delivered"
            )
        assert excinfo.value.failed_ids == ["ghost"]
        assert "1 order(s)" in str(excinfo.value)
        assert repo.get_by_id("order-1").status is OrderStatus.DELIVERED
        assert repo.get_by_id("order-3").status is OrderStatus.DELIVERED
        assert repo.get_by_id("order-2").status is OrderStatus.QUOTATION

    def test_write_failures_collected(self):
        repo = _setup(2)
        repo.fail_on_write = True
        with pytest.raises(BulkStatusUpdateError) as excinfo:
            BulkUpdateOrderStatusHandler(repo).handle(["order-1", "order-2"], "Pending")
        assert excinfo.value.failures == {"order-1": "disk full", "order-2": "disk full"}

    def test_duplicate_ids_once(self):
        repo = _setup(1)
        assert BulkUpdateOrderStatusHandler(repo).handle(["order-1", "order-1"], "Pending") == ["order-1"]


class TestDeleteOrder:

    def test_deletes(self):
        repo = _setup(2)
        DeleteOrderHandler(repo).handle("order-1")
        assert [o.id for o in repo.list_all()] == ["order-2"]

    def test_not_found(self):
        with pytest.raises(EntityNotFoundError, match="Order ghost not found"):
            DeleteOrderHandler(_setup(1)).handle("ghost")
