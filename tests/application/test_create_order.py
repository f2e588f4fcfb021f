"""Integration tests for the CreateOrder use case.

Runs against the in-memory fakes.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import DiscountSpec, OrderDraft, OrderItemSpec, SectionSpec
from orderdesk.domain.exceptions import PersistenceError, ValidationError
from orderdesk.domain.model.customer import Customer
from orderdesk.domain.model.order import UNKNOWN_CUSTOMER
from orderdesk.domain.model.value_objects import Currency, ExchangeRates
from tests.fakes import (
    FakeCustomerRepository,
    FakeOrderNumberSequence,
    FakeOrderRepository,
    FakeSettingsRepository,
)


def _setup(start: int = 1):
    """Build handler with fake repos and one known customer."""
    order_repo = FakeOrderRepository()
    customer_repo = FakeCustomerRepository([Customer(id="c1", name="Ayşe Yılmaz")])
    settings_repo = FakeSettingsRepository(
        ExchangeRates(usd=Decimal("32.50"), eur=Decimal("35.20"))
    )
    sequence = FakeOrderNumberSequence(start)
    handler = CreateOrderHandler(
        order_repo, customer_repo, settings_repo, sequence, clock=lambda: datetime(2024, 5, 1)
    )
    return handler, order_repo, customer_repo, settings_repo, sequence


def _draft(**overrides) -> OrderDraft:
    kwargs = dict(
        customer_id="c1",
        date=date(2024, 5, 1),
        sections=[
            SectionSpec("Salon", [OrderItemSpec("Tül Perde", Decimal("2"), "M2", Decimal("100"), "beyaz")]),
        ],
    )
    kwargs.update(overrides)
    return OrderDraft(**kwargs)


class TestCreateOrderHappyPath:

    def test_creates_order_with_correct_totals(self):
        handler, _, _, _, _ = _setup()
        dto = handler.handle(_draft(
            discounts=[DiscountSpec("percentage", Decimal("10"))],
            tax_rate=Decimal("10"),
        ))
        assert dto.items_total == Decimal("200.00")
        assert dto.total_discount_amount == Decimal("20.00")
        assert dto.tax_amount == Decimal("18.00")
        assert dto.grand_total == Decimal("198.00")
        assert dto.status == "Quotation"

    def test_assigns_number_and_id(self):
        handler, _, _, _, _ = _setup()
        dto = handler.handle(_draft())
        assert dto.order_number == "ORD-2024-0001"
        assert dto.id == "order-1"

    def test_persists_order(self):
        handler, order_repo, _, _, _ = _setup()
        dto = handler.handle(_draft())
        saved = order_repo.get_by_number(dto.order_number)
        assert saved is not None
        assert saved.grand_total == Decimal("200.00")

    def test_sequential_numbers(self):
        handler, _, _, _, sequence = _setup()
        numbers = [handler.handle(_draft()).order_number for _ in range(3)]
        assert numbers == ["ORD-2024-0001", "ORD-2024-0002", "ORD-2024-0003"]
        assert sequence.value == 4

    def test_sequence_continues_from_counter(self):
        handler, _, _, _, _ = _setup(start=42)
        assert handler.handle(_draft()).order_number == "ORD-2024-0042"


class TestCreateOrderSnapshots:

    def test_customer_name_snapshot(self):
        handler, _, _, _, _ = _setup()
        assert handler.handle(_draft()).customer_name == "Ayşe Yılmaz"

    def test_unknown_customer(self):
        handler, _, _, _, _ = _setup()
        dto = handler.handle(_draft(customer_id="ghost"))
        assert dto.customer_name == UNKNOWN_CUSTOMER

    def test_rates_snapshot_not_affected_by_later_changes(self):
        handler, order_repo, _, settings_repo, _ = _setup()
        dto = handler.handle(_draft(currency=Currency.USD))
        settings_repo.rates = ExchangeRates(usd=Decimal("40"), eur=Decimal("45"))
        saved = order_repo.get_by_id(dto.id)
        assert saved.exchange_rates_snapshot.usd == Decimal("32.50")
        assert dto.exchange_rates == {"USD": "32.50", "EUR": "35.20"}

    def test_foreign_price_stored_in_canonical_currency(self):
        handler, _, _, _, _ = _setup()
        dto = handler.handle(_draft(sections=[
            SectionSpec("Mutfak", [
                OrderItemSpec("Stor", Decimal("1"), "Adet", Decimal("10"), price_currency=Currency.USD),
            ]),
        ]))
        assert dto.sections[0].items[0].unit_price == Decimal("325.00")
        assert dto.grand_total == Decimal("325.00")


class TestCreateOrderValidation:

    def test_empty_sections_rejected_without_writing(self):
        handler, order_repo, _, _, sequence = _setup()
        with pytest.raises(ValidationError, match="at least one section"):
            handler.handle(_draft(sections=[]))
        assert order_repo.list_all() == []
        assert sequence.value == 1

    def test_bad_quantity_rejected(self):
        handler, _, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="quantity must be positive"):
            handler.handle(_draft(sections=[
                SectionSpec("Salon", [OrderItemSpec("Tül", Decimal("0"), "M2", Decimal("10"))]),
            ]))

    def test_nan_quantity_is_a_validation_error(self):
        handler, order_repo, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid number"):
            handler.handle(_draft(sections=[
                SectionSpec("Salon", [OrderItemSpec("Tül", Decimal("NaN"), "M2", Decimal("10"))]),
            ]))
        assert order_repo.list_all() == []

    def test_unknown_discount_kind(self):
        handler, _, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown discount type"):
            handler.handle(_draft(discounts=[DiscountSpec("bogus", Decimal("1"))]))

    def test_counter_not_advanced_when_write_fails(self):
        handler, order_repo, _, settings_repo, sequence = _setup()
        order_repo.fail_on_write = True
        with pytest.raises(PersistenceError):
            handler.handle(_draft())
        assert sequence.value == 1
        assert settings_repo.names == []


class TestCreateOrderSuggestions:

    def test_names_and_descriptions_recorded(self):
        handler, _, _, settings_repo, _ = _setup()
        handler.handle(_draft())
        assert settings_repo.names == ["Tül Perde"]
        assert settings_repo.descriptions == ["beyaz"]

    def test_suggestion_failure_does_not_fail_order(self):
        handler, order_repo, _, settings_repo, _ = _setup()
        settings_repo.fail_suggestion_writes = True
        dto = handler.handle(_draft())
        assert order_repo.get_by_id(dto.id) is not None
