import pytest

from sms.application.add_customer import AddCustomerHandler
from sms.application.add_product import AddProductHandler
from sms.infrastructure.bootstrap import unit_of_work_factory
from sms.infrastructure.persistence.database import Database


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "sms.db", timeout=10.0)
    db.create_schema()
    yield db
    db.close()


@pytest.fixture
def uow_factory(database):
    return unit_of_work_factory(database)


@pytest.fixture
def catalog(uow_factory):
    """Laptop (#1, 100.00, 8 units), Mouse (#2, 20.00, 1 unit) and customer Ana (#1)."""
    add_product = AddProductHandler(uow_factory)
    laptop = add_product.handle("Laptop", "100.00", stock=8)
    mouse = add_product.handle("Mouse", "20.00", stock=1)
    ana = AddCustomerHandler(uow_factory).handle("Ana", email="ana@example.com")
    return laptop, mouse, ana
