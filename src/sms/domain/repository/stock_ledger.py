"""Stock ledger — the only component allowed to change a product's stock.

Both operations run inside the caller's unit of work, so a stock change and
the sale write that motivated it commit or roll back together.

Implementations must apply ``try_decrement`` as a single conditional write
(check and decrement in one statement), never as read-compare-write: two
sales racing for the last unit must not both succeed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from sms.domain.exceptions import SaleError


@dataclass(frozen=True)
class StockAdjustment:
    """Outcome of ``StockLedger.try_decrement``.

    When ``applied`` is False, stock was left untouched and ``available``
    reports what was on hand when the decrement was refused.  ``requested``
    is the amount of this one decrement, which for an amended sale may be
    just the increase; pass the sale's full quantity to
    ``raise_if_refused`` so the error says so.
    """

    product_id: int
    requested: int
    applied: bool
    available: int | None = None

    def raise_if_refused(self, sale_quantity: int | None = None) -> None:
        if not self.applied:
            raise SaleError.insufficient_stock(
                self.product_id, self.available or 0, self.requested, sale_quantity
            )


def check_amount(amount: int) -> None:
    """Stock movements are positive whole units."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise SaleError.validation("amount", "Stock amount must be an integer")
    if amount <= 0:
        raise SaleError.validation("amount", "Stock amount must be positive")


class StockLedger(ABC):

    @abstractmethod
    def try_decrement(self, product_id: int, amount: int) -> StockAdjustment:
        """Apply ``stock -= amount`` only if ``stock >= amount``.

        Raises a NOT_FOUND ``SaleError`` if the product does not exist.
        """

    @abstractmethod
    def increment(self, product_id: int, amount: int) -> None:
        """Unconditionally apply ``stock += amount``.

        Raises a NOT_FOUND ``SaleError`` if the product does not exist.
        """

    @abstractmethod
    def current_stock(self, product_id: int) -> int | None:
        """Read the stock on hand, or None for an unknown product."""
