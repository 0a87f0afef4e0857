"""Money and Quantity: the two numbers every sale is built from.

Both are frozen and validate on construction, so a Sale can only ever hold
a non-negative two-decimal amount and a quantity between 1 and 9999.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from sms.domain.exceptions import SaleError

CENTS = Decimal("0.01")
MAX_QUANTITY = 9999


def round_money(amount: Decimal) -> Decimal:
    """Round to two decimals, half-up (0.005 -> 0.01)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """Monetary amount, always held with exactly two decimals.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  The system works in a single
    currency, so no currency code is carried.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise SaleError.validation(
                "amount",
                f"Money amount must be a Decimal, got {type(self.amount).__name__}",
            )
        if not self.amount.is_finite():
            raise SaleError.validation("amount", f"Invalid money amount: {self.amount}")
        if self.amount < Decimal("0"):
            raise SaleError.validation(
                "amount", f"Money amount cannot be negative, got {self.amount}"
            )
        # frozen dataclass: bypass __setattr__ to normalise the scale
        object.__setattr__(self, "amount", round_money(self.amount))

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        return self.amount >= other.amount

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise SaleError.validation("amount", f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))


@dataclass(frozen=True)
class Quantity:
    """Units sold in a single sale: an integer between 1 and 9999."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise SaleError.validation(
                "quantity",
                f"Quantity must be an integer, got {type(self.value).__name__}",
            )
        if self.value <= 0:
            raise SaleError.validation("quantity", "Quantity must be positive")
        if self.value > MAX_QUANTITY:
            raise SaleError.validation(
                "quantity", f"Quantity cannot exceed {MAX_QUANTITY:,} units"
            )

    def __str__(self) -> str:
        return str(self.value)
