"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from sms.domain.exceptions import SaleError
from sms.domain.model.product import Product
from sms.domain.model.value_objects import Money
from sms.domain.repository.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, name: str, price: str, stock: int = 0) -> Product:
        """Add a new product to the catalog with its opening stock."""
        product = Product.create(name=name, price=Money.of(price), stock=stock)

        with self._uow_factory() as uow:
            if uow.products.get_by_name(product.name) is not None:
                raise SaleError.validation(
                    "name", f"Product '{product.name}' already exists"
                )
            product = uow.products.add(product)
            uow.commit()

        logger.info("Product #%s '%s' added at %s", product.id, product.name, product.price)
        return product
