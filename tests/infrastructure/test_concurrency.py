"""Concurrent sale operations against one SQLite file: no oversell, no lost stock."""

import sqlite3
import threading
from datetime import date

import pytest

from sms.application.add_product import AddProductHandler
from sms.application.restock_product import RestockProductHandler
from sms.application.sale_coordinator import SaleCoordinator
from sms.domain.exceptions import ErrorKind, SaleError
from sms.infrastructure.bootstrap import unit_of_work_factory
from sms.infrastructure.persistence.database import Database

TODAY = date(2026, 10, 19)


def _run_concurrently(actions):
    """Start one thread per action, release them together, collect results."""
    barrier = threading.Barrier(len(actions))
    outcomes = []
    lock = threading.Lock()

    def worker(action):
        barrier.wait()
        try:
            result = action()
        except SaleError as exc:
            result = exc
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(a,)) for a in actions]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return outcomes


def _stock(uow_factory, product_id):
    with uow_factory(read_only=True) as uow:
        return uow.stock.current_stock(product_id)


def test_last_unit_sold_once(uow_factory, catalog):
    coordinator = SaleCoordinator(uow_factory, clock=lambda: TODAY)
    buy = lambda: coordinator.create_sale(TODAY, 1, 2, 1)  # noqa: E731

    outcomes = _run_concurrently([buy, buy])

    failures = [o for o in outcomes if isinstance(o, SaleError)]
    assert len(outcomes) == 2
    assert len(failures) == 1
    assert failures[0].kind is ErrorKind.INSUFFICIENT_STOCK
    assert _stock(uow_factory, 2) == 0
    assert len(coordinator.list_sales()) == 1


def test_many_buyers_share_stock_exactly(uow_factory, catalog):
    product = AddProductHandler(uow_factory).handle("Cable", "5.00", stock=20)
    coordinator = SaleCoordinator(uow_factory, clock=lambda: TODAY)
    buy = lambda: coordinator.create_sale(TODAY, 1, product.id, 3)  # noqa: E731

    outcomes = _run_concurrently([buy] * 10)

    sold = [o for o in outcomes if not isinstance(o, SaleError)]
    assert len(sold) == 6
    assert _stock(uow_factory, product.id) == 2
    assert coordinator.sales_total(TODAY, TODAY).amount == 6 * 15


def test_concurrent_restock_and_sale_conserve_units(uow_factory, catalog):
    coordinator = SaleCoordinator(uow_factory, clock=lambda: TODAY)
    restock = RestockProductHandler(uow_factory)
    actions = [
        lambda: restock.handle(1, 2),
        lambda: coordinator.create_sale(TODAY, 1, 1, 2),
    ] * 4

    outcomes = _run_concurrently(actions)

    assert not any(isinstance(o, SaleError) for o in outcomes)
    assert _stock(uow_factory, 1) == 8


def test_update_racing_delete_on_the_same_sale(uow_factory, catalog):
    coordinator = SaleCoordinator(uow_factory, clock=lambda: TODAY)

    for _ in range(10):
        sale = coordinator.create_sale(TODAY, 1, 1, 2)

        outcomes = _run_concurrently([
            lambda: coordinator.update_sale(sale.id, TODAY, 1, 1, 5),
            lambda: coordinator.delete_sale(sale.id),
        ])

        # The delete always lands; the update either ran first or found
        # nothing left to amend.
        errors = [o for o in outcomes if isinstance(o, SaleError)]
        assert all(e.kind is ErrorKind.NOT_FOUND for e in errors)
        assert len(errors) <= 1
        assert coordinator.list_sales() == []
        assert _stock(uow_factory, 1) == 8


def test_lock_timeout_is_a_persistence_failure(database, uow_factory, catalog):
    impatient = Database(database.path, timeout=0.2)
    coordinator = SaleCoordinator(unit_of_work_factory(impatient), clock=lambda: TODAY)
    holder = sqlite3.connect(database.path, isolation_level=None)
    holder.execute("BEGIN IMMEDIATE")
    try:
        with pytest.raises(SaleError) as exc_info:
            coordinator.create_sale(TODAY, 1, 1, 3)
    finally:
        holder.execute("ROLLBACK")
        holder.close()
        impatient.close()

    assert exc_info.value.kind is ErrorKind.PERSISTENCE
    assert "locked" in str(exc_info.value)
    assert _stock(uow_factory, 1) == 8
    assert SaleCoordinator(uow_factory).list_sales() == []
