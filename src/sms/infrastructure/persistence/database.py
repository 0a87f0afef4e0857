"""SQLite storage handle: connection pool, schema and error translation.

One ``Database`` is opened at process start and closed at shutdown; every
unit of work borrows a connection from it.  Connections run in autocommit
mode (``isolation_level=None``) so transactions are begun explicitly by the
unit of work, never implicitly by the driver.
"""

from __future__ import annotations

import logging
import queue
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sms.domain.exceptions import SaleError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS product (
    id      INTEGER PRIMARY KEY AUTOINCREMENT,
    name    TEXT    NOT NULL UNIQUE COLLATE NOCASE
                    CHECK (length(trim(name)) BETWEEN 1 AND 100),
    price   TEXT    NOT NULL CHECK (CAST(price AS REAL) > 0
                                    AND CAST(price AS REAL) <= 999999.99),
    stock   INTEGER NOT NULL DEFAULT 0 CHECK (stock >= 0)
);

CREATE TABLE IF NOT EXISTS customer (
    id      INTEGER PRIMARY KEY AUTOINCREMENT,
    name    TEXT    NOT NULL CHECK (length(trim(name)) > 0),
    dni     TEXT,
    phone   TEXT,
    email   TEXT
);

CREATE TABLE IF NOT EXISTS sale (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    date        TEXT    NOT NULL,
    customer_id INTEGER NOT NULL REFERENCES customer(id),
    product_id  INTEGER NOT NULL REFERENCES product(id),
    quantity    INTEGER NOT NULL CHECK (quantity > 0),
    unit_price  TEXT    NOT NULL CHECK (CAST(unit_price AS REAL) > 0),
    total       TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_sale_date     ON sale(date);
CREATE INDEX IF NOT EXISTS idx_sale_customer ON sale(customer_id);
CREATE INDEX IF NOT EXISTS idx_sale_product  ON sale(product_id);
"""


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise any driver error as a PERSISTENCE ``SaleError``."""
    try:
        yield
    except sqlite3.Error as exc:
        raise SaleError.persistence(exc) from exc


class Database:
    """Explicit storage handle owning a small pool of SQLite connections."""

    def __init__(self, path: Path | str, timeout: float = 5.0, pool_size: int = 4) -> None:
        self._path = str(path)
        self._timeout = timeout
        self._pool: queue.LifoQueue[sqlite3.Connection] = queue.LifoQueue(maxsize=pool_size)
        self._lock = threading.Lock()
        self._closed = False

    @property
    def path(self) -> str:
        return self._path

    # --- Lifecycle ------------------------------------------------------------

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close every pooled connection; later borrowing fails."""
        with self._lock:
            self._closed = True
        while True:
            try:
                conn = self._pool.get_nowait()
            except queue.Empty:
                break
            conn.close()
        logger.debug("Database %s closed", self._path)

    def create_schema(self) -> None:
        with self.connection() as conn, translate_errors():
            conn.executescript(SCHEMA)
        logger.info("Schema ready in %s", self._path)

    # --- Connections ----------------------------------------------------------

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Borrow a connection; it goes back to the pool on exit."""
        conn = self._acquire()
        try:
            yield conn
        finally:
            self._give_back(conn)

    def _acquire(self) -> sqlite3.Connection:
        with self._lock:
            if self._closed:
                raise SaleError.persistence(RuntimeError("database is closed"))
        try:
            return self._pool.get_nowait()
        except queue.Empty:
            return self._connect()

    def _give_back(self, conn: sqlite3.Connection) -> None:
        if conn.in_transaction:
            conn.rollback()
        with self._lock:
            closed = self._closed
        if closed:
            conn.close()
            return
        try:
            self._pool.put_nowait(conn)
        except queue.Full:
            conn.close()

    def _connect(self) -> sqlite3.Connection:
        with translate_errors():
            conn = sqlite3.connect(
                self._path,
                timeout=self._timeout,
                isolation_level=None,
                check_same_thread=False,
            )
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
        return conn
