"""SQLite implementation of ProductRepository."""

from __future__ import annotations

import sqlite3
from decimal import Decimal

from sms.domain.model.product import Product
from sms.domain.model.value_objects import Money
from sms.domain.repository.product_repository import ProductRepository
from sms.infrastructure.persistence.database import translate_errors

_COLUMNS = "id, name, price, stock"


class SqliteProductRepository(ProductRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        with translate_errors():
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM product WHERE id = ?", (product_id,)
            ).fetchone()
        return self._to_domain(row) if row else None

    def get_by_name(self, name: str) -> Product | None:
        with translate_errors():
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM product WHERE name = ? COLLATE NOCASE",
                (name.strip(),),
            ).fetchone()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Product]:
        with translate_errors():
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM product ORDER BY id"
            ).fetchall()
        return [self._to_domain(r) for r in rows]

    def add(self, product: Product) -> Product:
        with translate_errors():
            cur = self._conn.execute(
                "INSERT INTO product (name, price, stock) VALUES (?, ?, ?)",
                (product.name, str(product.price.amount), product.stock),
            )
        product.id = int(cur.lastrowid)
        return product

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            price=Money(Decimal(row["price"])),
            stock=row["stock"],
        )
