"""Application services: customer management use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from orderdesk.application.dto import (
    CustomerDTO,
    OrderDTO,
    customer_to_dto,
    order_to_dto,
)
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.customer import Customer
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(
        self,
        name: str,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
    ) -> CustomerDTO:
        customer = Customer.create(name, phone, email, address)
        self._customer_repo.add(customer)
        logger.info("Added customer %s (%s)", customer.name, customer.id)
        return customer_to_dto(customer)


class UpdateCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(
        self,
        customer_id: str,
        name: str,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
    ) -> CustomerDTO:
        """Change a customer's details.

        Existing orders keep the name they were written with until they
        are themselves updated.
        """
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer {customer_id} not found")
        customer.update_details(name, phone, email, address)
        self._customer_repo.update(customer)
        return customer_to_dto(customer)


class DeleteCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, customer_id: str) -> None:
        """Delete a customer.  Their orders are kept as they are."""
        if not self._customer_repo.delete(customer_id):
            raise EntityNotFoundError(f"Customer {customer_id} not found")
        logger.info("Deleted customer %s", customer_id)


class ListCustomersHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self) -> list[CustomerDTO]:
        customers = sorted(self._customer_repo.list_all(), key=lambda c: c.name.casefold())
        return [customer_to_dto(c) for c in customers]


@dataclass(frozen=True)
class CustomerDetailDTO:
    customer: CustomerDTO
    orders: list[OrderDTO]


class ShowCustomerHandler:

    def __init__(
        self,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._customer_repo = customer_repo
        self._order_repo = order_repo

    def handle(self, customer_id: str) -> CustomerDetailDTO:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer {customer_id} not found")
        orders = [o for o in self._order_repo.list_all() if o.customer_id == customer_id]
        orders.sort(key=lambda o: o.date, reverse=True)
        return CustomerDetailDTO(
            customer=customer_to_dto(customer),
            orders=[order_to_dto(o) for o in orders],
        )
