"""Sale aggregate — one customer buying one product.

The Sale captures the product's unit price at the moment of the sale
(price snapshot) and derives ``total`` from it.  A caller never supplies
the total; it is recomputed every time the sale is created or revised.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

from sms.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class SaleCandidate:
    """Raw, not-yet-validated input for creating or amending a sale.

    Fields are kept loose (``None`` allowed, plain ints) because the
    validator's job is to report exactly which one is wrong.
    """

    date: date | None
    customer_id: int | None
    product_id: int | None
    quantity: int | None


@dataclass
class Sale:
    """Aggregate root for sales.

    Use ``Sale.create()`` for new sales.  ``__init__`` stays simple so the
    repository can reconstitute persisted rows without re-validating.
    """

    id: int | None
    date: date
    customer_id: int
    product_id: int
    quantity: Quantity
    unit_price: Money  # locked at sale time
    total: Money

    # --- Factory (used for NEW sales only) ------------------------------------

    @staticmethod
    def create(
        sale_date: date,
        customer_id: int,
        product_id: int,
        quantity: Quantity,
        unit_price: Money,
    ) -> Sale:
        return Sale(
            id=None,
            date=sale_date,
            customer_id=customer_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            total=unit_price * quantity.value,
        )

    def revised(
        self,
        sale_date: date,
        customer_id: int,
        product_id: int,
        quantity: Quantity,
        unit_price: Money,
    ) -> Sale:
        """Return a copy carrying the new values under the same id."""
        return replace(
            self,
            date=sale_date,
            customer_id=customer_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            total=unit_price * quantity.value,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def expected_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def is_consistent(self) -> bool:
        """True if the stored total matches unit price x quantity."""
        return self.total == self.expected_total
