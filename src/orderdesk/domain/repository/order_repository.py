"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_number(self, order_number: str) -> Order | None:
        """Return an order by its human-readable number, or None."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, in storage order."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order, assigning its ID if it has none."""

    @abstractmethod
    def update(self, order: Order) -> None:
        """Persist changes to an existing order."""

    @abstractmethod
    def delete(self, order_id: str) -> bool:
        """Remove an order; return False if it did not exist."""
