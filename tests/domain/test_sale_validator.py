"""Unit tests for the SaleValidator domain service."""

from datetime import date, timedelta

import pytest

from sms.domain.exceptions import ErrorKind, SaleError
from sms.domain.model.customer import Customer
from sms.domain.model.product import Product
from sms.domain.model.sale import SaleCandidate
from sms.domain.model.value_objects import Money
from sms.domain.service.sale_validator import SaleValidator, ValidationRule
from tests.fakes import FakeCustomerRepository, FakeProductRepository, FakeStore

TODAY = date(2026, 10, 19)


def _validator(retention_days: int = 365) -> tuple[SaleValidator, FakeStore]:
    store = FakeStore(
        products=[Product(id=10, name="Laptop", price=Money.of("100.00"), stock=8)],
        customers=[Customer(id=1, name="Ana")],
    )
    validator = SaleValidator(
        FakeCustomerRepository(store),
        FakeProductRepository(store),
        today=TODAY,
        retention_days=retention_days,
    )
    return validator, store


def _candidate(**overrides) -> SaleCandidate:
    values = {"date": TODAY, "customer_id": 1, "product_id": 10, "quantity": 3}
    values.update(overrides)
    return SaleCandidate(**values)


class TestValidCandidate:

    def test_passes_and_resolves_references(self):
        validator, _ = _validator()
        result = validator.validate(_candidate())
        assert result.ok
        assert result.customer.name == "Ana"
        assert result.product.id == 10
        result.raise_for_failure()  # no-op

    def test_does_not_touch_stock(self):
        validator, store = _validator()
        validator.validate(_candidate(quantity=9999))
        assert store.stock_of(10) == 8


class TestDateRules:

    def test_missing_date(self):
        validator, _ = _validator()
        result = validator.validate(_candidate(date=None))
        assert not result.ok
        assert result.rule is ValidationRule.DATE_REQUIRED
        assert result.field == "date"

    def test_future_date(self):
        validator, _ = _validator()
        tomorrow = TODAY + timedelta(days=1)
        result = validator.validate(_candidate(date=tomorrow))
        assert result.rule is ValidationRule.DATE_IN_FUTURE
        assert result.value == tomorrow

    def test_retention_boundary_is_inclusive(self):
        validator, _ = _validator()
        assert validator.validate(_candidate(date=TODAY - timedelta(days=365))).ok

    def test_older_than_retention_window(self):
        validator, _ = _validator()
        result = validator.validate(_candidate(date=TODAY - timedelta(days=366)))
        assert result.rule is ValidationRule.DATE_TOO_OLD

    def test_configurable_retention(self):
        validator, _ = _validator(retention_days=30)
        result = validator.validate(_candidate(date=TODAY - timedelta(days=31)))
        assert result.rule is ValidationRule.DATE_TOO_OLD
        assert "30 days" in result.reason


class TestReferenceRules:

    @pytest.mark.parametrize("customer_id", [None, 0, -4])
    def test_customer_required(self, customer_id):
        validator, _ = _validator()
        result = validator.validate(_candidate(customer_id=customer_id))
        assert result.rule is ValidationRule.CUSTOMER_REQUIRED

    def test_unknown_customer(self):
        validator, _ = _validator()
        result = validator.validate(_candidate(customer_id=99))
        assert result.rule is ValidationRule.CUSTOMER_NOT_FOUND
        assert result.value == 99

    @pytest.mark.parametrize("product_id", [None, 0])
    def test_product_required(self, product_id):
        validator, _ = _validator()
        result = validator.validate(_candidate(product_id=product_id))
        assert result.rule is ValidationRule.PRODUCT_REQUIRED

    def test_unknown_product(self):
        validator, _ = _validator()
        result = validator.validate(_candidate(product_id=99))
        assert result.rule is ValidationRule.PRODUCT_NOT_FOUND


class TestQuantityAndPriceRules:

    @pytest.mark.parametrize("quantity", [None, 0, -1, 10000, 2.5, True])
    def test_quantity_out_of_range(self, quantity):
        validator, _ = _validator()
        result = validator.validate(_candidate(quantity=quantity))
        assert result.rule is ValidationRule.QUANTITY_OUT_OF_RANGE
        assert result.field == "quantity"

    @pytest.mark.parametrize("quantity", [1, 9999])
    def test_quantity_bounds_accepted(self, quantity):
        validator, _ = _validator()
        assert validator.validate(_candidate(quantity=quantity)).ok

    def test_zero_unit_price(self):
        validator, store = _validator()
        store.products[10].price = Money.zero()
        result = validator.validate(_candidate())
        assert result.rule is ValidationRule.UNIT_PRICE_INVALID


class TestOrdering:

    def test_first_failing_rule_wins(self):
        validator, _ = _validator()
        result = validator.validate(
            SaleCandidate(date=None, customer_id=None, product_id=None, quantity=0)
        )
        assert result.rule is ValidationRule.DATE_REQUIRED

    def test_customer_checked_before_product(self):
        validator, _ = _validator()
        result = validator.validate(_candidate(customer_id=99, product_id=99))
        assert result.rule is ValidationRule.CUSTOMER_NOT_FOUND


class TestRaiseForFailure:

    def test_unresolvable_reference_is_not_found(self):
        validator, _ = _validator()
        result = validator.validate(_candidate(product_id=99))
        with pytest.raises(SaleError) as exc_info:
            result.raise_for_failure()
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert exc_info.value.details == {"entity_type": "Product", "id": 99}

    def test_rule_violation_is_validation_error(self):
        validator, _ = _validator()
        result = validator.validate(_candidate(quantity=0))
        with pytest.raises(SaleError, match="between 1 and 9,999") as exc_info:
            result.raise_for_failure()
        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert exc_info.value.details["field"] == "quantity"
