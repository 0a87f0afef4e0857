"""Abstract unit of work — one storage transaction per sale operation.

Usage::

    with uow_factory() as uow:
        ...
        uow.commit()

Leaving the ``with`` block without ``commit()`` (including by exception)
rolls everything back: sale rows and stock movements alike.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Callable

from sms.domain.repository.customer_repository import CustomerRepository
from sms.domain.repository.product_repository import ProductRepository
from sms.domain.repository.sale_repository import SaleRepository
from sms.domain.repository.stock_ledger import StockLedger


class UnitOfWork(ABC):

    products: ProductRepository
    customers: CustomerRepository
    sales: SaleRepository
    stock: StockLedger

    def __enter__(self) -> UnitOfWork:
        self._committed = False
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if not self._committed:
                self.rollback()
        finally:
            self._release()

    def commit(self) -> None:
        self._commit()
        self._committed = True

    @abstractmethod
    def _commit(self) -> None:
        """Make every change of this unit durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every change of this unit."""

    def _release(self) -> None:
        """Return underlying resources (connections, locks). Optional."""


# Called with ``read_only=True`` for queries that never write.
UnitOfWorkFactory = Callable[..., UnitOfWork]
