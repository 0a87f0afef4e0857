"""Domain-level exceptions.

Every failure of the sale engine is a ``SaleError`` whose ``kind`` tells the
caller what went wrong and whose ``details`` carry the structured payload
(field name, offending id, available stock ...).  Callers branch on
``kind`` instead of on exception subclasses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""


class ErrorKind(Enum):
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    CONFLICT = "CONFLICT"
    PERSISTENCE = "PERSISTENCE"


class SaleError(DomainException):
    """A sale, product or stock operation was rejected.

    No side effects survive a ``SaleError``: the unit of work that raised it
    has been rolled back by the time the caller sees it.
    """

    def __init__(self, kind: ErrorKind, message: str, **details: Any) -> None:
        super().__init__(message)
        self.kind = kind
        self.details = details

    def __repr__(self) -> str:
        return f"SaleError({self.kind.value}, {str(self)!r}, {self.details!r})"

    # --- Factories ------------------------------------------------------------

    @classmethod
    def validation(cls, field: str, reason: str) -> SaleError:
        return cls(ErrorKind.VALIDATION, reason, field=field, reason=reason)

    @classmethod
    def not_found(cls, entity_type: str, entity_id: Any) -> SaleError:
        return cls(
            ErrorKind.NOT_FOUND,
            f"{entity_type} #{entity_id} not found",
            entity_type=entity_type,
            id=entity_id,
        )

    @classmethod
    def insufficient_stock(
        cls,
        product_id: int,
        available: int,
        requested: int,
        sale_quantity: int | None = None,
    ) -> SaleError:
        """``requested`` is what the ledger was asked for.

        When that is only the increase of an amended sale, ``sale_quantity``
        carries the sale's new full quantity.
        """
        if sale_quantity is None:
            return cls(
                ErrorKind.INSUFFICIENT_STOCK,
                f"Insufficient stock for product #{product_id} "
                f"(available {available}, requested {requested})",
                product_id=product_id,
                available=available,
                requested=requested,
            )
        return cls(
            ErrorKind.INSUFFICIENT_STOCK,
            f"Insufficient stock for product #{product_id} "
            f"(available {available}, requested {requested} more "
            f"to reach a quantity of {sale_quantity})",
            product_id=product_id,
            available=available,
            requested=requested,
            sale_quantity=sale_quantity,
        )

    @classmethod
    def conflict(cls, entity_type: str, entity_id: Any) -> SaleError:
        return cls(
            ErrorKind.CONFLICT,
            f"{entity_type} #{entity_id} was modified concurrently; retry the operation",
            entity_type=entity_type,
            id=entity_id,
        )

    @classmethod
    def persistence(cls, cause: BaseException) -> SaleError:
        return cls(ErrorKind.PERSISTENCE, f"Storage failure: {cause}", cause=cause)
