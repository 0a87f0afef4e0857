"""SQLite implementation of the stock ledger.

The decrement is one conditional UPDATE; success is read from the
affected-row count, so the sufficiency check and the write can never be
separated by another transaction.
"""

from __future__ import annotations

import logging
import sqlite3

from sms.domain.exceptions import SaleError
from sms.domain.repository.stock_ledger import StockAdjustment, StockLedger, check_amount
from sms.infrastructure.persistence.database import translate_errors

logger = logging.getLogger(__name__)


class SqliteStockLedger(StockLedger):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def try_decrement(self, product_id: int, amount: int) -> StockAdjustment:
        check_amount(amount)
        with translate_errors():
            cur = self._conn.execute(
                "UPDATE product SET stock = stock - ? WHERE id = ? AND stock >= ?",
                (amount, product_id, amount),
            )
        if cur.rowcount == 1:
            logger.debug("Stock of product #%s -%s", product_id, amount)
            return StockAdjustment(product_id, amount, applied=True)

        available = self.current_stock(product_id)
        if available is None:
            raise SaleError.not_found("Product", product_id)
        return StockAdjustment(product_id, amount, applied=False, available=available)

    def increment(self, product_id: int, amount: int) -> None:
        check_amount(amount)
        with translate_errors():
            cur = self._conn.execute(
                "UPDATE product SET stock = stock + ? WHERE id = ?",
                (amount, product_id),
            )
        if cur.rowcount != 1:
            raise SaleError.not_found("Product", product_id)
        logger.debug("Stock of product #%s +%s", product_id, amount)

    def current_stock(self, product_id: int) -> int | None:
        with translate_errors():
            row = self._conn.execute(
                "SELECT stock FROM product WHERE id = ?", (product_id,)
            ).fetchone()
        return row["stock"] if row else None
