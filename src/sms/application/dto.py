"""Display-ready view of a sale for the CLI.

Money is pre-formatted and the date is ISO text, so commands never touch
``Money`` or ``Quantity`` directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from sms.domain.model.sale import Sale


@dataclass(frozen=True)
class SaleDTO:
    """Output: a single sale as displayed to the user."""

    id: int
    date: str
    customer_id: int
    product_id: int
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    total: str

    @staticmethod
    def from_sale(sale: Sale) -> SaleDTO:
        return SaleDTO(
            id=sale.id,  # type: ignore[arg-type]
            date=sale.date.isoformat(),
            customer_id=sale.customer_id,
            product_id=sale.product_id,
            quantity=sale.quantity.value,
            unit_price=str(sale.unit_price),
            total=str(sale.total),
        )
