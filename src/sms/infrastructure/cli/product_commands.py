"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from sms.application.add_product import AddProductHandler
from sms.application.restock_product import RestockProductHandler
from sms.domain.exceptions import DomainException
from sms.infrastructure.bootstrap import Application


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Opening stock.")
@click.pass_obj
def product_add(app: Application, name: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(app.uow_factory)

    try:
        product = handler.handle(name=name, price=price, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.pass_obj
def product_list(app: Application) -> None:
    """List all products in the catalog."""
    try:
        with app.uow_factory(read_only=True) as uow:
            products = uow.products.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>12} {'Stock':>8}")
    click.echo("-" * 49)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>12} {p.stock:>8}")


@click.command("restock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
@click.pass_obj
def product_restock(app: Application, product_id: int, quantity: int) -> None:
    """Add received units to a product's stock."""
    handler = RestockProductHandler(app.uow_factory)

    try:
        stock = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} now has {stock} in stock")
