"""SQLite unit of work.

Writers open with ``BEGIN IMMEDIATE``: the database write lock is taken
before the first read, so concurrent sale operations are serialized and
each runs against a consistent snapshot.  Readers use a plain deferred
``BEGIN``.  A busy timeout surfaces as a PERSISTENCE error; nothing is
retried here.
"""

from __future__ import annotations

from contextlib import ExitStack

from sms.domain.repository.unit_of_work import UnitOfWork
from sms.infrastructure.persistence.database import Database, translate_errors
from sms.infrastructure.persistence.sqlite_customer_repository import (
    SqliteCustomerRepository,
)
from sms.infrastructure.persistence.sqlite_product_repository import (
    SqliteProductRepository,
)
from sms.infrastructure.persistence.sqlite_sale_repository import SqliteSaleRepository
from sms.infrastructure.persistence.sqlite_stock_ledger import SqliteStockLedger


class SqliteUnitOfWork(UnitOfWork):

    def __init__(self, database: Database, read_only: bool = False) -> None:
        self._database = database
        self._read_only = read_only
        self._stack = ExitStack()

    def __enter__(self) -> SqliteUnitOfWork:
        conn = self._stack.enter_context(self._database.connection())
        try:
            with translate_errors():
                conn.execute("BEGIN" if self._read_only else "BEGIN IMMEDIATE")
        except BaseException:
            self._stack.close()
            raise
        self._conn = conn
        self.products = SqliteProductRepository(conn)
        self.customers = SqliteCustomerRepository(conn)
        self.sales = SqliteSaleRepository(conn)
        self.stock = SqliteStockLedger(conn)
        super().__enter__()
        return self

    def _commit(self) -> None:
        with translate_errors():
            self._conn.commit()

    def rollback(self) -> None:
        with translate_errors():
            if self._conn.in_transaction:
                self._conn.rollback()

    def _release(self) -> None:
        self._stack.close()
