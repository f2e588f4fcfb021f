"""Abstract repository for Customer aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer."""

    @abstractmethod
    def add(self, customer: Customer) -> None:
        """Persist a new customer, assigning its ID if it has none."""

    @abstractmethod
    def update(self, customer: Customer) -> None:
        """Persist changes to an existing customer."""

    @abstractmethod
    def delete(self, customer_id: str) -> bool:
        """Remove a customer; return False if it did not exist."""
