"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from stockroom.domain.exceptions import DomainException
from stockroom.domain.model.order import Order, OrderStatus
from stockroom.domain.model.value_objects import Quantity
from stockroom.infrastructure.bootstrap import build_services
from stockroom.infrastructure.config import Settings


def _display_order(order: Order) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {order.id}  (status={order.status.value})")
    click.echo(f"  Product:  {order.product_id}")
    click.echo(f"  Quantity: {order.quantity}")
    click.echo(f"  Total:    {order.total_price}")
    if order.created_at is not None:
        click.echo(f"  Created:  {order.created_at:%Y-%m-%d %H:%M UTC}")


@click.command("create")
@click.option("--product-id", required=True, help="ID of the product to order.")
@click.option("--quantity", type=int, required=True, help="Number of units.")
@click.pass_obj
def order_create(settings: Settings, product_id: str, quantity: int) -> None:
    """Place an order; the product's stock is reduced accordingly."""
    service = build_services(settings).orders

    try:
        order = service.create_order(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.id} created")
    _display_order(order)


@click.command("list")
@click.pass_obj
def order_list(settings: Settings) -> None:
    """List all orders."""
    try:
        orders = build_services(settings).orders.get_all_orders()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<38} {'Product':<38} {'Qty':>5} {'Total':>10}  Status")
    click.echo("-" * 104)
    for o in orders:
        click.echo(
            f"{o.id:<38} {o.product_id:<38} {o.quantity.value:>5} "
            f"{str(o.total_price):>10}  {o.status.value}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.pass_obj
def order_show(settings: Settings, order_id: str) -> None:
    """Show a single order."""
    try:
        order = build_services(settings).orders.get_order_by_id(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(order)


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    default=None,
    help="New status.",
)
@click.option("--quantity", type=int, default=None, help="New quantity (total is not recomputed).")
@click.pass_obj
def order_update(
    settings: Settings,
    order_id: str,
    status: str | None,
    quantity: int | None,
) -> None:
    """Update an order's status or quantity."""
    service = build_services(settings).orders

    try:
        current = service.get_order_by_id(order_id)
        order = Order(
            id=order_id,
            product_id=current.product_id,
            quantity=current.quantity if quantity is None else Quantity(quantity),
            total_price=current.total_price,
            status=current.status if status is None else OrderStatus.parse(status),
        )
        updated = service.update_order(order_id, order)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} updated")
    _display_order(updated)


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.pass_obj
def order_delete(settings: Settings, order_id: str) -> None:
    """Delete an order.  Stock is not returned to the product."""
    try:
        build_services(settings).orders.delete_order(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} deleted")
