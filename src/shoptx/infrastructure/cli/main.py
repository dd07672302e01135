import click
from sqlalchemy.exc import SQLAlchemyError

from shoptx.infrastructure.bootstrap import bootstrap
from shoptx.infrastructure.cli.catalog_commands import (
    customer_add,
    product_add,
    product_list,
    product_update,
)
from shoptx.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
)
from shoptx.infrastructure.config import get_settings
from shoptx.infrastructure.persistence.database import Database


@click.group()
@click.option(
    "--database-url",
    envvar="SHOPTX_DATABASE_URL",
    default=None,
    help="SQLAlchemy URL of the order store.",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
    """shoptx: order transactions against a shared inventory"""
    if isinstance(ctx.obj, Database):
        # Injected by the caller (tests, embedding); it owns the lifecycle.
        return
    db = bootstrap(get_settings(database_url=database_url))
    ctx.obj = db
    ctx.call_on_close(db.dispose)


@cli.group()
def db() -> None:
    """Manage the order store."""


@db.command("init")
@click.pass_obj
def db_init(database: Database) -> None:
    """Create the tables if they do not exist."""
    try:
        database.create_schema()
    except SQLAlchemyError as exc:
        raise click.ClickException(f"Schema creation failed: {exc}")
    click.echo("Schema ready.")


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def customer() -> None:
    """Manage customers."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
customer.add_command(customer_add)
