from __future__ import annotations

from pathlib import Path

import click

from sms.domain.exceptions import DomainException
from sms.infrastructure.bootstrap import Application
from sms.infrastructure.cli.customer_commands import customer_add, customer_list
from sms.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_restock,
)
from sms.infrastructure.cli.sale_commands import (
    sale_create,
    sale_delete,
    sale_list,
    sale_show,
    sale_total,
    sale_update,
)
from sms.infrastructure.config import load_settings
from sms.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to sms.ini (default: $SMS_CONFIG or ./sms.ini).",
)
@click.option("--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """SMS — Sales Management System"""
    try:
        settings = load_settings(config_path)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    configure_logging(
        "DEBUG" if verbose else settings.log_level,
        settings.log_file,
    )
    app = Application.start(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)


@cli.command("init-db")
@click.pass_obj
def init_db(app: Application) -> None:
    """Create the database tables if they do not exist."""
    try:
        app.database.create_schema()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Database ready at {app.database.path}")


@cli.group()
def sale() -> None:
    """Manage sales."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def customer() -> None:
    """Manage customers."""


# Register subcommands
sale.add_command(sale_create)
sale.add_command(sale_update)
sale.add_command(sale_delete)
sale.add_command(sale_show)
sale.add_command(sale_list)
sale.add_command(sale_total)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_restock)
customer.add_command(customer_add)
customer.add_command(customer_list)
