"""Domain service: Sale Validator.

Side-effect-free checks on a candidate sale.  Rules run in a fixed order
and stop at the first failure, so the caller is told about exactly one
problem: the first one a clerk would need to fix.

The validator only *reads* customers and products; it never touches stock.
Stock sufficiency is not its concern, because it can only be decided
atomically by the stock ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any

from sms.domain.exceptions import SaleError
from sms.domain.model.customer import Customer
from sms.domain.model.product import Product
from sms.domain.model.sale import SaleCandidate
from sms.domain.model.value_objects import MAX_QUANTITY
from sms.domain.repository.customer_repository import CustomerRepository
from sms.domain.repository.product_repository import ProductRepository

DEFAULT_RETENTION_DAYS = 365


class ValidationRule(Enum):
    DATE_REQUIRED = "DATE_REQUIRED"
    DATE_IN_FUTURE = "DATE_IN_FUTURE"
    DATE_TOO_OLD = "DATE_TOO_OLD"
    CUSTOMER_REQUIRED = "CUSTOMER_REQUIRED"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    PRODUCT_REQUIRED = "PRODUCT_REQUIRED"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    QUANTITY_OUT_OF_RANGE = "QUANTITY_OUT_OF_RANGE"
    UNIT_PRICE_INVALID = "UNIT_PRICE_INVALID"


_NOT_FOUND_ENTITY = {
    ValidationRule.CUSTOMER_NOT_FOUND: "Customer",
    ValidationRule.PRODUCT_NOT_FOUND: "Product",
}


@dataclass(frozen=True)
class ValidationResult:
    """Tagged outcome of ``SaleValidator.validate``.

    On success ``customer`` and ``product`` hold the resolved references.
    On failure ``rule``, ``field``, ``value`` and ``reason`` describe the
    first rule that did not hold.
    """

    ok: bool
    rule: ValidationRule | None = None
    field: str | None = None
    value: Any = None
    reason: str | None = None
    customer: Customer | None = None
    product: Product | None = None

    @staticmethod
    def passed(customer: Customer, product: Product) -> ValidationResult:
        return ValidationResult(ok=True, customer=customer, product=product)

    @staticmethod
    def failed(rule: ValidationRule, field: str, value: Any, reason: str) -> ValidationResult:
        return ValidationResult(ok=False, rule=rule, field=field, value=value, reason=reason)

    def raise_for_failure(self) -> None:
        """Convert a failed result into the matching ``SaleError``.

        Unresolvable references become NOT_FOUND; every other rule is a
        VALIDATION error.
        """
        if self.ok:
            return
        entity_type = _NOT_FOUND_ENTITY.get(self.rule)  # type: ignore[arg-type]
        if entity_type is not None:
            raise SaleError.not_found(entity_type, self.value)
        raise SaleError.validation(self.field or "", self.reason or "")


class SaleValidator:

    def __init__(
        self,
        customers: CustomerRepository,
        products: ProductRepository,
        today: date,
        retention_days: int = DEFAULT_RETENTION_DAYS,
    ) -> None:
        self._customers = customers
        self._products = products
        self._today = today
        self._retention_days = retention_days

    @property
    def earliest_date(self) -> date:
        return self._today - timedelta(days=self._retention_days)

    def validate(self, candidate: SaleCandidate) -> ValidationResult:
        failure = self._check_date(candidate.date)
        if failure is not None:
            return failure

        if not _is_positive_id(candidate.customer_id):
            return ValidationResult.failed(
                ValidationRule.CUSTOMER_REQUIRED,
                "customer_id",
                candidate.customer_id,
                "A valid customer must be selected",
            )
        customer = self._customers.get_by_id(candidate.customer_id)  # type: ignore[arg-type]
        if customer is None:
            return ValidationResult.failed(
                ValidationRule.CUSTOMER_NOT_FOUND,
                "customer_id",
                candidate.customer_id,
                "The selected customer does not exist",
            )

        if not _is_positive_id(candidate.product_id):
            return ValidationResult.failed(
                ValidationRule.PRODUCT_REQUIRED,
                "product_id",
                candidate.product_id,
                "A valid product must be selected",
            )
        product = self._products.get_by_id(candidate.product_id)  # type: ignore[arg-type]
        if product is None:
            return ValidationResult.failed(
                ValidationRule.PRODUCT_NOT_FOUND,
                "product_id",
                candidate.product_id,
                "The selected product does not exist",
            )

        qty = candidate.quantity
        if isinstance(qty, bool) or not isinstance(qty, int) or not 1 <= qty <= MAX_QUANTITY:
            return ValidationResult.failed(
                ValidationRule.QUANTITY_OUT_OF_RANGE,
                "quantity",
                qty,
                f"Quantity must be between 1 and {MAX_QUANTITY:,}",
            )

        if product.price is None or product.price.is_zero:
            return ValidationResult.failed(
                ValidationRule.UNIT_PRICE_INVALID,
                "unit_price",
                product.price,
                "Unit price must be greater than zero",
            )

        return ValidationResult.passed(customer, product)

    # --- Internal helpers -----------------------------------------------------

    def _check_date(self, sale_date: date | None) -> ValidationResult | None:
        if sale_date is None:
            return ValidationResult.failed(
                ValidationRule.DATE_REQUIRED, "date", None, "Sale date is required"
            )
        if sale_date > self._today:
            return ValidationResult.failed(
                ValidationRule.DATE_IN_FUTURE,
                "date",
                sale_date,
                "Sales cannot be dated in the future",
            )
        if sale_date < self.earliest_date:
            return ValidationResult.failed(
                ValidationRule.DATE_TOO_OLD,
                "date",
                sale_date,
                f"Sales older than {self._retention_days} days cannot be recorded",
            )
        return None


def _is_positive_id(value: int | None) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
