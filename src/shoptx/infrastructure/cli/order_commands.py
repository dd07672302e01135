"""CLI commands for orders."""

from __future__ import annotations

import click

from shoptx.application.dto import OrderDTO, OrderItemSpec
from shoptx.application.outcomes import (
    Created,
    Deleted,
    Failed,
    Found,
    NotFound,
    OrderEndpoint,
    Rejected,
    Updated,
)
from shoptx.domain.model.value_objects import Money
from shoptx.infrastructure.persistence.database import Database


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_str, qty_str = pair.rsplit(":", 1)
        try:
            product_id = int(product_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Product ID and quantity must be integers."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty))
    return specs


def _fail(outcome) -> None:
    """Turn a Rejected/Failed/NotFound outcome into a non-zero exit."""
    if isinstance(outcome, (Rejected, Failed)):
        raise click.ClickException(f"{outcome.detail} [{outcome.kind}]")
    if isinstance(outcome, NotFound):
        raise click.ClickException(outcome.detail)


def _money(amount) -> str:
    return str(Money.of(amount))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    customer = dto.customer_name or f"#{dto.customer_id}"
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {customer}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        name = item.product_name or f"#{item.product_id}"
        click.echo(
            f"  {name:<20} {item.quantity:>5} "
            f"{_money(item.price_per_item):>10} {_money(item.line_total):>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {_money(dto.total_amount):>20}")


@click.command("create")
@click.option("--customer", "customer_id", required=True, type=int, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def order_create(db: Database, customer_id: int, items: str) -> None:
    """Create a new order (deducts stock)."""
    specs = _parse_items(items)
    outcome = OrderEndpoint(db.unit_of_work).create_order(customer_id, specs)
    _fail(outcome)
    assert isinstance(outcome, Created)
    click.echo(f"Order #{outcome.order_id} created  (status=pending)")
    click.echo(f"Total: {_money(outcome.total_amount)}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(db: Database, order_id: int) -> None:
    """Show details of an existing order."""
    outcome = OrderEndpoint(db.unit_of_work).get_by_id(order_id)
    _fail(outcome)
    assert isinstance(outcome, Found)
    _display_order(outcome.value)


@click.command("list")
@click.option("--customer", "customer_id", type=int, default=None, help="Only this customer's orders.")
@click.pass_obj
def order_list(db: Database, customer_id: int | None) -> None:
    """List orders, most recent first."""
    endpoint = OrderEndpoint(db.unit_of_work)
    if customer_id is not None:
        outcome = endpoint.get_by_customer(customer_id)
    else:
        outcome = endpoint.get_all()
    _fail(outcome)
    assert isinstance(outcome, Found)

    if not outcome.value:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<20} {'Status':<10} {'Items':>5} {'Total':>12}")
    click.echo("-" * 57)
    for dto in outcome.value:
        customer = dto.customer_name or f"#{dto.customer_id}"
        click.echo(
            f"{dto.id:<6} {customer:<20} {dto.status:<10} "
            f"{len(dto.items):>5} {_money(dto.total_amount):>12}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--to",
    "status",
    required=True,
    type=click.Choice(["pending", "completed", "cancelled"]),
    help="New status.",
)
@click.pass_obj
def order_status(db: Database, order_id: int, status: str) -> None:
    """Change an order's status (cancelling restores stock)."""
    outcome = OrderEndpoint(db.unit_of_work).update_status(order_id, status)
    _fail(outcome)
    assert isinstance(outcome, Updated)
    click.echo(f"Order #{outcome.order_id} is now {outcome.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(db: Database, order_id: int) -> None:
    """Cancel a pending order and return its stock."""
    outcome = OrderEndpoint(db.unit_of_work).update_status(order_id, "cancelled")
    _fail(outcome)
    click.echo(f"Order #{order_id} cancelled, stock restored.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.confirmation_option(prompt="Deleting an order removes its history. Continue?")
@click.pass_obj
def order_delete(db: Database, order_id: int) -> None:
    """Delete an order and its items (restores stock)."""
    outcome = OrderEndpoint(db.unit_of_work).delete_order(order_id)
    _fail(outcome)
    assert isinstance(outcome, Deleted)
    click.echo(f"Order #{order_id} deleted.")
