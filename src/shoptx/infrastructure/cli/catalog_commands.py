"""CLI commands for products and customers."""

from __future__ import annotations

import click

from shoptx.application.add_customer import AddCustomerHandler
from shoptx.application.add_product import AddProductHandler
from shoptx.application.update_product import UpdateProductHandler
from shoptx.domain.exceptions import DomainException
from shoptx.infrastructure.persistence.database import Database


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Opening stock quantity.")
@click.option("--description", default=None, help="Optional description.")
@click.pass_obj
def product_add(db: Database, name: str, price: str, stock: int, description: str | None) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(db.unit_of_work)

    try:
        product = handler.handle(name=name, price=price, stock=stock, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.pass_obj
def product_list(db: Database) -> None:
    """List all products in the catalog."""
    try:
        with db.unit_of_work() as uow:
            products = uow.products.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>8}")
    click.echo("-" * 47)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>10} {p.stock:>8}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.pass_obj
def product_update(db: Database, product_id: int, price: str) -> None:
    """Update a product's price (existing orders keep theirs)."""
    handler = UpdateProductHandler(db.unit_of_work)

    try:
        handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to ${price}")


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", default=None, help="Contact email.")
@click.pass_obj
def customer_add(db: Database, name: str, email: str | None) -> None:
    """Register a customer."""
    handler = AddCustomerHandler(db.unit_of_work)

    try:
        customer = handler.handle(name=name, email=email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.name}' added")
