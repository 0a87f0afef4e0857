"""CLI commands for the Sale aggregate."""

from __future__ import annotations

from datetime import date, datetime

import click

from sms.application.dto import SaleDTO
from sms.domain.exceptions import DomainException
from sms.domain.repository.sale_repository import SaleFilter
from sms.infrastructure.bootstrap import Application

DATE = click.DateTime(formats=["%Y-%m-%d"])


def _to_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def _display_sale(dto: SaleDTO) -> None:
    """Shared formatting for displaying a single sale."""
    click.echo(f"Sale #{dto.id}  ({dto.date})")
    click.echo(f"Customer: #{dto.customer_id}")
    click.echo()
    click.echo(f"  {'Product':<10} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*42}")
    click.echo(
        f"  {'#' + str(dto.product_id):<10} {dto.quantity:>5} {dto.unit_price:>12} {dto.total:>12}"
    )


@click.command("create")
@click.option("--customer", "customer_id", required=True, type=int, help="Customer ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units sold.")
@click.option("--date", "sale_date", type=DATE, default=None, help="Sale date (YYYY-MM-DD, default today).")
@click.pass_obj
def sale_create(
    app: Application,
    customer_id: int,
    product_id: int,
    quantity: int,
    sale_date: datetime | None,
) -> None:
    """Record a sale (takes units out of stock)."""
    coordinator = app.sale_coordinator()

    try:
        sale = coordinator.create_sale(
            _to_date(sale_date) or date.today(), customer_id, product_id, quantity
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale #{sale.id} created.")
    _display_sale(SaleDTO.from_sale(sale))


@click.command("update")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID to amend.")
@click.option("--customer", "customer_id", required=True, type=int, help="Customer ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units sold.")
@click.option("--date", "sale_date", type=DATE, required=True, help="Sale date (YYYY-MM-DD).")
@click.pass_obj
def sale_update(
    app: Application,
    sale_id: int,
    customer_id: int,
    product_id: int,
    quantity: int,
    sale_date: datetime,
) -> None:
    """Amend a sale (moves stock by the difference)."""
    coordinator = app.sale_coordinator()

    try:
        sale = coordinator.update_sale(
            sale_id, _to_date(sale_date), customer_id, product_id, quantity
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale #{sale.id} updated.")
    _display_sale(SaleDTO.from_sale(sale))


@click.command("delete")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID to delete.")
@click.pass_obj
def sale_delete(app: Application, sale_id: int) -> None:
    """Delete a sale (returns its units to stock)."""
    try:
        app.sale_coordinator().delete_sale(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale #{sale_id} deleted, stock restored.")


@click.command("show")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID to display.")
@click.pass_obj
def sale_show(app: Application, sale_id: int) -> None:
    """Show details of an existing sale."""
    try:
        sale = app.sale_coordinator().get_sale(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(SaleDTO.from_sale(sale))


@click.command("list")
@click.option("--customer", "customer_id", type=int, default=None, help="Only this customer.")
@click.option("--product", "product_id", type=int, default=None, help="Only this product.")
@click.option("--from", "date_from", type=DATE, default=None, help="Earliest date (inclusive).")
@click.option("--to", "date_to", type=DATE, default=None, help="Latest date (inclusive).")
@click.pass_obj
def sale_list(
    app: Application,
    customer_id: int | None,
    product_id: int | None,
    date_from: datetime | None,
    date_to: datetime | None,
) -> None:
    """List sales, newest first."""
    criteria = SaleFilter(
        customer_id=customer_id,
        product_id=product_id,
        date_from=_to_date(date_from),
        date_to=_to_date(date_to),
    )
    try:
        sales = app.sale_coordinator().list_sales(criteria)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sales:
        click.echo("No sales found.")
        return

    click.echo(
        f"{'ID':<6} {'Date':<10} {'Customer':>8} {'Product':>8} {'Qty':>5} {'Price':>12} {'Total':>12}"
    )
    click.echo("-" * 67)
    for dto in map(SaleDTO.from_sale, sales):
        click.echo(
            f"{dto.id:<6} {dto.date:<10} {dto.customer_id:>8} {dto.product_id:>8} "
            f"{dto.quantity:>5} {dto.unit_price:>12} {dto.total:>12}"
        )


@click.command("total")
@click.option("--from", "date_from", type=DATE, required=True, help="Start date (inclusive).")
@click.option("--to", "date_to", type=DATE, required=True, help="End date (inclusive).")
@click.pass_obj
def sale_total(app: Application, date_from: datetime, date_to: datetime) -> None:
    """Show the sum of sale totals over a period."""
    try:
        total = app.sale_coordinator().sales_total(_to_date(date_from), _to_date(date_to))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sales from {date_from:%Y-%m-%d} to {date_to:%Y-%m-%d}: {total}")
