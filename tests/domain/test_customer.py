"""Unit tests for the Customer aggregate."""

import pytest

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.customer import Customer


class TestCustomer:

    def test_create_strips_and_blanks_to_none(self):
        customer = Customer.create("  Mehmet Kaya ", phone=" ", email="m@example.com")
        assert customer.id is None
        assert customer.name == "Mehmet Kaya"
        assert customer.phone is None
        assert customer.email == "m@example.com"
        assert customer.address is None

    def test_name_required(self):
        with pytest.raises(ValidationError, match="Customer name is required"):
            Customer.create("   ")

    def test_update_details(self):
        customer = Customer.create("Mehmet Kaya", phone="555")
        customer.update_details("Mehmet Kaya Ltd.", address="İzmir")
        assert customer.name == "Mehmet Kaya Ltd."
        assert customer.phone is None
        assert customer.address == "İzmir"
