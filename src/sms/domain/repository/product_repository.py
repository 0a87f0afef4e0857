"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQLite, in-memory)
live in the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sms.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by ID."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product and return it with its assigned ID.

        Stock is written once here; afterwards it only moves through
        the stock ledger.
        """
