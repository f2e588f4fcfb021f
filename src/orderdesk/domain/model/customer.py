"""Customer aggregate.

Customers live independently of orders.  Orders refer to a customer by ID
only and keep their own copy of the name, so renaming or deleting a
customer never rewrites order history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderdesk.domain.exceptions import ValidationError


@dataclass
class Customer:

    id: str | None
    name: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
    ) -> Customer:
        customer = Customer(id=None, name="")
        customer.update_details(name, phone, email, address)
        return customer

    def update_details(
        self,
        name: str,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
    ) -> None:
        """Change contact details.

        This does NOT affect existing orders because orders capture a
        name snapshot when they are written.
        """
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        self.name = name.strip()
        self.phone = _blank_to_none(phone)
        self.email = _blank_to_none(email)
        self.address = _blank_to_none(address)


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()
