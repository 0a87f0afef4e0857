"""SQLite implementation of CustomerRepository."""

from __future__ import annotations

import sqlite3

from sms.domain.model.customer import Customer
from sms.domain.repository.customer_repository import CustomerRepository
from sms.infrastructure.persistence.database import translate_errors

_COLUMNS = "id, name, dni, phone, email"


class SqliteCustomerRepository(CustomerRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get_by_id(self, customer_id: int) -> Customer | None:
        with translate_errors():
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM customer WHERE id = ?", (customer_id,)
            ).fetchone()
        return Customer(**dict(row)) if row else None

    def list_all(self) -> list[Customer]:
        with translate_errors():
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM customer ORDER BY id"
            ).fetchall()
        return [Customer(**dict(r)) for r in rows]

    def add(self, customer: Customer) -> Customer:
        with translate_errors():
            cur = self._conn.execute(
                "INSERT INTO customer (name, dni, phone, email) VALUES (?, ?, ?, ?)",
                (customer.name, customer.dni, customer.phone, customer.email),
            )
        customer.id = int(cur.lastrowid)
        return customer
