"""Tests for the read-side handlers and catalog helpers."""

from datetime import date, timedelta

import pytest

from sms.application.add_customer import AddCustomerHandler
from sms.application.add_product import AddProductHandler
from sms.application.restock_product import RestockProductHandler
from sms.application.sale_coordinator import SaleCoordinator
from sms.domain.exceptions import ErrorKind, SaleError
from sms.domain.model.customer import Customer
from sms.domain.model.product import Product
from sms.domain.model.value_objects import Money
from sms.domain.repository.sale_repository import SaleFilter
from tests.fakes import FakeStore, FakeUnitOfWorkFactory

TODAY = date(2026, 10, 19)
YESTERDAY = TODAY - timedelta(days=1)
LAST_WEEK = TODAY - timedelta(days=7)


def _setup():
    """Three sales across two customers, two products and three dates."""
    store = FakeStore(
        products=[
            Product(id=10, name="Laptop", price=Money.of("100.00"), stock=50),
            Product(id=11, name="Mouse", price=Money.of("20.00"), stock=50),
            Product(id=12, name="Cable", price=Money.of("5.00"), stock=50),
        ],
        customers=[Customer(id=1, name="Ana"), Customer(id=2, name="Bruno")],
    )
    factory = FakeUnitOfWorkFactory(store)
    coordinator = SaleCoordinator(factory, clock=lambda: TODAY)
    coordinator.create_sale(LAST_WEEK, 1, 10, 1)  # #1  100.00
    coordinator.create_sale(YESTERDAY, 2, 11, 2)  # #2   40.00
    coordinator.create_sale(TODAY, 1, 11, 3)      # #3   60.00
    return coordinator, store, factory


class TestGetSale:

    def test_returns_stored_sale(self):
        coordinator, _, _ = _setup()
        sale = coordinator.get_sale(2)
        assert sale.customer_id == 2
        assert sale.total == Money.of("40.00")

    def test_unknown_id_is_not_found(self):
        coordinator, _, _ = _setup()
        with pytest.raises(SaleError) as exc_info:
            coordinator.get_sale(99)
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    @pytest.mark.parametrize("bad_id", [0, -3])
    def test_non_positive_id_is_validation(self, bad_id):
        coordinator, _, _ = _setup()
        with pytest.raises(SaleError) as exc_info:
            coordinator.get_sale(bad_id)
        assert exc_info.value.kind is ErrorKind.VALIDATION


class TestListSales:

    def test_newest_first(self):
        coordinator, _, _ = _setup()
        assert [s.id for s in coordinator.list_sales()] == [3, 2, 1]

    def test_same_day_ties_highest_id_first(self):
        coordinator, _, _ = _setup()
        coordinator.create_sale(TODAY, 2, 12, 1)  # #4
        assert [s.id for s in coordinator.list_sales()][:2] == [4, 3]

    def test_by_customer(self):
        coordinator, _, _ = _setup()
        sales = coordinator.list_sales(SaleFilter(customer_id=1))
        assert [s.id for s in sales] == [3, 1]

    def test_by_product(self):
        coordinator, _, _ = _setup()
        sales = coordinator.list_sales(SaleFilter(product_id=11))
        assert [s.id for s in sales] == [3, 2]

    def test_by_date_range_inclusive(self):
        coordinator, _, _ = _setup()
        sales = coordinator.list_sales(SaleFilter(date_from=LAST_WEEK, date_to=YESTERDAY))
        assert [s.id for s in sales] == [2, 1]

    def test_inverted_range_rejected(self):
        coordinator, _, _ = _setup()
        with pytest.raises(SaleError, match="Start date"):
            coordinator.list_sales(SaleFilter(date_from=TODAY, date_to=LAST_WEEK))

    def test_queries_do_not_commit(self):
        coordinator, store, _ = _setup()
        commits = store.commits
        coordinator.list_sales()
        assert store.commits == commits


class TestSalesTotal:

    def test_whole_period(self):
        coordinator, _, _ = _setup()
        assert coordinator.sales_total(LAST_WEEK, TODAY) == Money.of("200.00")

    def test_single_day(self):
        coordinator, _, _ = _setup()
        assert coordinator.sales_total(YESTERDAY, YESTERDAY) == Money.of("40.00")

    def test_empty_period_is_zero(self):
        coordinator, _, _ = _setup()
        far = TODAY - timedelta(days=100)
        assert coordinator.sales_total(far, far).is_zero

    def test_missing_date_rejected(self):
        coordinator, _, _ = _setup()
        with pytest.raises(SaleError, match="Both dates"):
            coordinator.sales_total(None, TODAY)


class TestSaleReferences:

    def test_customer_and_product_references(self):
        coordinator, _, _ = _setup()
        assert coordinator.customer_has_sales(1)
        assert coordinator.product_has_sales(11)
        assert not coordinator.product_has_sales(12)

    def test_delete_clears_reference(self):
        coordinator, _, _ = _setup()
        coordinator.delete_sale(1)
        assert not coordinator.product_has_sales(10)


class TestAddProduct:

    def test_adds_with_opening_stock(self):
        _, store, factory = _setup()
        product = AddProductHandler(factory).handle("Keyboard", "45.50", stock=7)
        assert store.products[product.id].stock == 7
        assert store.products[product.id].price == Money.of("45.50")

    def test_duplicate_name_rejected_case_insensitively(self):
        _, store, factory = _setup()
        count = len(store.products)
        with pytest.raises(SaleError, match="already exists"):
            AddProductHandler(factory).handle("laptop", "10.00")
        assert len(store.products) == count

    def test_invalid_price_rejected(self):
        _, _, factory = _setup()
        with pytest.raises(SaleError) as exc_info:
            AddProductHandler(factory).handle("Desk", "abc")
        assert exc_info.value.kind is ErrorKind.VALIDATION


class TestAddCustomer:

    def test_blank_optional_fields_become_none(self):
        _, store, factory = _setup()
        customer = AddCustomerHandler(factory).handle("  Carla ", dni=" ", email="c@x.io")
        stored = store.customers[customer.id]
        assert stored.name == "Carla"
        assert stored.dni is None
        assert stored.email == "c@x.io"


class TestRestockProduct:

    def test_returns_new_level(self):
        _, store, factory = _setup()
        assert RestockProductHandler(factory).handle(12, 5) == 55
        assert store.stock_of(12) == 55

    def test_unknown_product(self):
        _, _, factory = _setup()
        with pytest.raises(SaleError) as exc_info:
            RestockProductHandler(factory).handle(99, 5)
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_non_positive_amount_rejected(self):
        _, store, factory = _setup()
        with pytest.raises(SaleError):
            RestockProductHandler(factory).handle(12, 0)
        assert store.stock_of(12) == 50
