"""The user's own company details, printed at the top of every order."""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.exceptions import ValidationError


@dataclass(frozen=True)
class CompanyInfo:

    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None

    @staticmethod
    def of(
        name: str,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> CompanyInfo:
        if not name or not name.strip():
            raise ValidationError("Company name is required")
        return CompanyInfo(
            name=name.strip(),
            email=_clean(email),
            phone=_clean(phone),
            address=_clean(address),
        )

    def contact_lines(self) -> list[str]:
        return [v for v in (self.address, self.phone, self.email) if v]


def _clean(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


DEFAULT_COMPANY_INFO = CompanyInfo(
    name="Firma Adınız",
    email="firma@mail.com",
    phone="(000) 000 0000",
    address="Firma Adresiniz",
)
