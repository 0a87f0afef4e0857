"""CLI commands for customers."""

from __future__ import annotations

import click

from sms.application.add_customer import AddCustomerHandler
from sms.domain.exceptions import DomainException
from sms.infrastructure.bootstrap import Application


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--dni", default=None, help="National ID number.")
@click.option("--phone", default=None, help="Phone number.")
@click.option("--email", default=None, help="Email address.")
@click.pass_obj
def customer_add(
    app: Application,
    name: str,
    dni: str | None,
    phone: str | None,
    email: str | None,
) -> None:
    """Register a customer."""
    handler = AddCustomerHandler(app.uow_factory)

    try:
        customer = handler.handle(name, dni=dni, phone=phone, email=email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.name}' added")


@click.command("list")
@click.pass_obj
def customer_list(app: Application) -> None:
    """List all customers."""
    try:
        with app.uow_factory(read_only=True) as uow:
            customers = uow.customers.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Phone':<14} {'Email'}")
    click.echo("-" * 60)
    for c in customers:
        click.echo(f"{c.id:<6} {c.name:<24} {c.phone or '':<14} {c.email or ''}")
