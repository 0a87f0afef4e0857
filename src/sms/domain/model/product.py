"""Product aggregate.

Products live independently of sales. Once sales exist, ``stock`` is only
ever changed through the stock ledger; the in-memory ``stock`` value is a
read snapshot, never written back by the sale engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sms.domain.exceptions import SaleError
from sms.domain.model.value_objects import Money

MAX_NAME_LENGTH = 100
MAX_PRICE = Money(Decimal("999999.99"))


@dataclass
class Product:
    """A product in the catalog.

    ``id`` is ``None`` until the product store assigns one.
    """

    id: int | None
    name: str
    price: Money
    stock: int = 0

    @staticmethod
    def create(name: str, price: Money, stock: int = 0) -> Product:
        """Create a new catalog product, enforcing all invariants."""
        if not name or not name.strip():
            raise SaleError.validation("name", "Product name is required")
        name = name.strip()
        if len(name) > MAX_NAME_LENGTH:
            raise SaleError.validation(
                "name", f"Product name cannot exceed {MAX_NAME_LENGTH} characters"
            )
        check_price(price)
        if isinstance(stock, bool) or not isinstance(stock, int):
            raise SaleError.validation("stock", "Stock must be an integer")
        if stock < 0:
            raise SaleError.validation("stock", "Stock cannot be negative")
        return Product(id=None, name=name, price=price, stock=stock)


def check_price(price: Money) -> None:
    if price.is_zero:
        raise SaleError.validation("price", "Product price must be greater than zero")
    if price > MAX_PRICE:
        raise SaleError.validation("price", f"Product price cannot exceed {MAX_PRICE}")
