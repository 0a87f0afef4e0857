"""Abstract repository for Sale aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from sms.domain.model.sale import Sale
from sms.domain.model.value_objects import Money


@dataclass(frozen=True)
class SaleFilter:
    """Optional criteria for listing sales; ``None`` means "any"."""

    customer_id: int | None = None
    product_id: int | None = None
    date_from: date | None = None
    date_to: date | None = None

    def matches(self, sale: Sale) -> bool:
        if self.customer_id is not None and sale.customer_id != self.customer_id:
            return False
        if self.product_id is not None and sale.product_id != self.product_id:
            return False
        if self.date_from is not None and sale.date < self.date_from:
            return False
        if self.date_to is not None and sale.date > self.date_to:
            return False
        return True


class SaleRepository(ABC):

    @abstractmethod
    def get_by_id(self, sale_id: int) -> Sale | None:
        """Return a sale by its ID, or None if not found."""

    @abstractmethod
    def find(self, criteria: SaleFilter) -> list[Sale]:
        """Return matching sales, newest date first (ties: highest ID first)."""

    @abstractmethod
    def add(self, sale: Sale) -> Sale:
        """Insert a new sale and return it with its generated ID."""

    @abstractmethod
    def update(self, sale: Sale) -> bool:
        """Overwrite an existing sale. Returns False if no row matched."""

    @abstractmethod
    def delete(self, sale_id: int) -> bool:
        """Remove a sale. Returns False if no row matched."""

    @abstractmethod
    def total_between(self, date_from: date, date_to: date) -> Money:
        """Sum of sale totals dated within the inclusive range."""

    @abstractmethod
    def exists_for_customer(self, customer_id: int) -> bool:
        """True if at least one sale references the customer."""

    @abstractmethod
    def exists_for_product(self, product_id: int) -> bool:
        """True if at least one sale references the product."""
