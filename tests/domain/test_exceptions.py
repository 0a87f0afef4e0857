"""Unit tests for the SaleError tagged error type."""

from sms.domain.exceptions import DomainException, ErrorKind, SaleError


def test_validation_payload():
    err = SaleError.validation("quantity", "Quantity must be positive")
    assert isinstance(err, DomainException)
    assert err.kind is ErrorKind.VALIDATION
    assert err.details == {"field": "quantity", "reason": "Quantity must be positive"}
    assert str(err) == "Quantity must be positive"


def test_not_found_payload():
    err = SaleError.not_found("Sale", 42)
    assert err.kind is ErrorKind.NOT_FOUND
    assert err.details == {"entity_type": "Sale", "id": 42}
    assert "Sale #42 not found" in str(err)


def test_insufficient_stock_payload():
    err = SaleError.insufficient_stock(10, available=5, requested=6)
    assert err.kind is ErrorKind.INSUFFICIENT_STOCK
    assert err.details == {"product_id": 10, "available": 5, "requested": 6}


def test_conflict_and_persistence():
    assert SaleError.conflict("Sale", 1).kind is ErrorKind.CONFLICT
    cause = OSError("disk full")
    err = SaleError.persistence(cause)
    assert err.kind is ErrorKind.PERSISTENCE
    assert err.details["cause"] is cause
    assert "disk full" in str(err)


def test_repr_mentions_kind():
    assert "NOT_FOUND" in repr(SaleError.not_found("Product", 3))


def test_insufficient_stock_for_an_increase_names_the_full_quantity():
    err = SaleError.insufficient_stock(10, available=2, requested=3, sale_quantity=7)
    assert err.details == {
        "product_id": 10, "available": 2, "requested": 3, "sale_quantity": 7,
    }
    assert "requested 3 more to reach a quantity of 7" in str(err)
