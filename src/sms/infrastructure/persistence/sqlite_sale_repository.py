"""SQLite implementation of SaleRepository.

Dates are stored as ISO ``YYYY-MM-DD`` text (sorts and compares correctly
as strings); money as its two-decimal text so no float ever touches it.
"""

from __future__ import annotations

import sqlite3
from datetime import date
from decimal import Decimal

from sms.domain.model.sale import Sale
from sms.domain.model.value_objects import Money, Quantity
from sms.domain.repository.sale_repository import SaleFilter, SaleRepository
from sms.infrastructure.persistence.database import translate_errors

_COLUMNS = "id, date, customer_id, product_id, quantity, unit_price, total"


class SqliteSaleRepository(SaleRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- SaleRepository interface ---------------------------------------------

    def get_by_id(self, sale_id: int) -> Sale | None:
        with translate_errors():
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM sale WHERE id = ?", (sale_id,)
            ).fetchone()
        return self._to_domain(row) if row else None

    def find(self, criteria: SaleFilter) -> list[Sale]:
        clauses: list[str] = []
        params: list[object] = []
        if criteria.customer_id is not None:
            clauses.append("customer_id = ?")
            params.append(criteria.customer_id)
        if criteria.product_id is not None:
            clauses.append("product_id = ?")
            params.append(criteria.product_id)
        if criteria.date_from is not None:
            clauses.append("date >= ?")
            params.append(criteria.date_from.isoformat())
        if criteria.date_to is not None:
            clauses.append("date <= ?")
            params.append(criteria.date_to.isoformat())

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with translate_errors():
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM sale {where} ORDER BY date DESC, id DESC",
                params,
            ).fetchall()
        return [self._to_domain(r) for r in rows]

    def add(self, sale: Sale) -> Sale:
        with translate_errors():
            cur = self._conn.execute(
                "INSERT INTO sale (date, customer_id, product_id, quantity, unit_price, total) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                self._to_row(sale),
            )
        sale.id = int(cur.lastrowid)
        return sale

    def update(self, sale: Sale) -> bool:
        with translate_errors():
            cur = self._conn.execute(
                "UPDATE sale SET date = ?, customer_id = ?, product_id = ?, "
                "quantity = ?, unit_price = ?, total = ? WHERE id = ?",
                (*self._to_row(sale), sale.id),
            )
        return cur.rowcount == 1

    def delete(self, sale_id: int) -> bool:
        with translate_errors():
            cur = self._conn.execute("DELETE FROM sale WHERE id = ?", (sale_id,))
        return cur.rowcount == 1

    def total_between(self, date_from: date, date_to: date) -> Money:
        with translate_errors():
            rows = self._conn.execute(
                "SELECT total FROM sale WHERE date BETWEEN ? AND ?",
                (date_from.isoformat(), date_to.isoformat()),
            ).fetchall()
        return Money(sum((Decimal(r["total"]) for r in rows), Decimal("0")))

    def exists_for_customer(self, customer_id: int) -> bool:
        return self._exists("customer_id", customer_id)

    def exists_for_product(self, product_id: int) -> bool:
        return self._exists("product_id", product_id)

    # --- Mapping --------------------------------------------------------------

    def _exists(self, column: str, value: int) -> bool:
        with translate_errors():
            row = self._conn.execute(
                f"SELECT 1 FROM sale WHERE {column} = ? LIMIT 1", (value,)
            ).fetchone()
        return row is not None

    @staticmethod
    def _to_row(sale: Sale) -> tuple:
        return (
            sale.date.isoformat(),
            sale.customer_id,
            sale.product_id,
            sale.quantity.value,
            str(sale.unit_price.amount),
            str(sale.total.amount),
        )

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Sale:
        return Sale(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            customer_id=row["customer_id"],
            product_id=row["product_id"],
            quantity=Quantity(row["quantity"]),
            unit_price=Money(Decimal(row["unit_price"])),
            total=Money(Decimal(row["total"])),
        )
