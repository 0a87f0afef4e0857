"""Customer entity — a read-only dependency of the sale engine."""

from __future__ import annotations

from dataclasses import dataclass

from sms.domain.exceptions import SaleError


@dataclass
class Customer:

    id: int | None
    name: str
    dni: str | None = None
    phone: str | None = None
    email: str | None = None

    @staticmethod
    def create(
        name: str,
        dni: str | None = None,
        phone: str | None = None,
        email: str | None = None,
    ) -> Customer:
        if not name or not name.strip():
            raise SaleError.validation("name", "Customer name is required")
        return Customer(
            id=None,
            name=name.strip(),
            dni=_blank_to_none(dni),
            phone=_blank_to_none(phone),
            email=_blank_to_none(email),
        )


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()
