"""Tests for the UpdateOrder use case."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import OrderDraft, OrderItemSpec, SectionSpec
from orderdesk.application.update_order import UpdateOrderHandler
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.model.customer import Customer
from orderdesk.domain.model.order import UNKNOWN_CUSTOMER
from orderdesk.domain.model.value_objects import ExchangeRates
from tests.fakes import (
    FakeCustomerRepository,
    FakeOrderNumberSequence,
    FakeOrderRepository,
    FakeSettingsRepository,
)


def _draft(customer_id: str = "c1", qty: str = "1", status: str | None = None) -> OrderDraft:
    return OrderDraft(
        customer_id=customer_id,
        date=date(2024, 5, 1),
        sections=[SectionSpec("Salon", [OrderItemSpec("Fon Perde", Decimal(qty), "Mtül", Decimal("50"))])],
        status=status,
    )


def _setup():
    """Create one order for customer c1 and return the update handler."""
    order_repo = FakeOrderRepository()
    customer_repo = FakeCustomerRepository([
        Customer(id="c1", name="Ayşe Yılmaz"),
        Customer(id="c2", name="Can Demir"),
    ])
    settings_repo = FakeSettingsRepository()
    create = CreateOrderHandler(
        order_repo, customer_repo, settings_repo, FakeOrderNumberSequence(),
        clock=lambda: datetime(2024, 5, 1),
    )
    created = create.handle(_draft())
    handler = UpdateOrderHandler(order_repo, customer_repo, settings_repo)
    return handler, created, order_repo, customer_repo, settings_repo


class TestUpdateOrder:

    def test_keeps_id_and_number(self):
        handler, created, _, _, _ = _setup()
        dto = handler.handle(created.id, _draft(qty="3"))
        assert dto.id == created.id
        assert dto.order_number == created.order_number

    def test_recomputes_totals(self):
        handler, created, order_repo, _, _ = _setup()
        handler.handle(created.id, _draft(qty="3"))
        assert order_repo.get_by_id(created.id).grand_total == Decimal("150.00")

    def test_refreshes_name_snapshot(self):
        handler, created, _, customer_repo, _ = _setup()
        customer = customer_repo.get_by_id("c1")
        customer.update_details("Ayşe Yılmaz Kara")
        customer_repo.update(customer)
        assert handler.handle(created.id, _draft()).customer_name == "Ayşe Yılmaz Kara"

    def test_refreshes_rates_snapshot(self):
        handler, created, _, _, settings_repo = _setup()
        settings_repo.rates = ExchangeRates(usd=Decimal("40"), eur=Decimal("44"))
        dto = handler.handle(created.id, _draft())
        assert dto.exchange_rates == {"USD": "40", "EUR": "44"}

    def test_switch_customer(self):
        handler, created, _, _, _ = _setup()
        assert handler.handle(created.id, _draft(customer_id="c2")).customer_name == "Can Demir"

    def test_deleted_customer_keeps_previous_name(self):
        handler, created, _, customer_repo, _ = _setup()
        customer_repo.delete("c1")
        assert handler.handle(created.id, _draft()).customer_name == "Ayşe Yılmaz"

    def test_unknown_new_customer(self):
        handler, created, _, _, _ = _setup()
        assert handler.handle(created.id, _draft(customer_id="ghost")).customer_name == UNKNOWN_CUSTOMER

    def test_status_kept_unless_given(self):
        handler, created, _, _, _ = _setup()
        assert handler.handle(created.id, _draft()).status == "Quotation"
        assert handler.handle(created.id, _draft(status="Pending")).status == "Pending"

    def test_not_found(self):
        handler, _, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle("missing", _draft())

    def test_invalid_draft_leaves_stored_order(self):
        handler, created, order_repo, _, _ = _setup()
        with pytest.raises(ValidationError):
            handler.handle(created.id, _draft(qty="-1"))
        assert order_repo.get_by_id(created.id).grand_total == Decimal("50.00")

    def test_feeds_suggestions(self):
        handler, created, _, _, settings_repo = _setup()
        handler.handle(created.id, OrderDraft(
            customer_id="c1",
            date=date(2024, 5, 1),
            sections=[SectionSpec("Salon", [OrderItemSpec("Zebra Perde", Decimal("1"), "Adet", Decimal("5"))])],
        ))
        assert settings_repo.names == ["Fon Perde", "Zebra Perde"]
