"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from stockroom.domain.exceptions import DomainException
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Money
from stockroom.infrastructure.bootstrap import build_services
from stockroom.infrastructure.config import Settings


def _display_product(p: Product) -> None:
    click.echo(f"Product {p.id}")
    click.echo(f"  Name:     {p.name}")
    click.echo(f"  Price:    {p.price}")
    click.echo(f"  Stock:    {p.stock}")
    click.echo(f"  Category: {p.category or '-'}")
    if p.updated_at is not None:
        click.echo(f"  Updated:  {p.updated_at:%Y-%m-%d %H:%M UTC}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", type=int, default=0, show_default=True, help="Units in stock.")
@click.option("--category", default="", help="Catalogue category.")
@click.option("--id", "product_id", default=None, help="Explicit product ID (generated if omitted).")
@click.pass_obj
def product_add(
    settings: Settings,
    name: str,
    price: str,
    stock: int,
    category: str,
    product_id: str | None,
) -> None:
    """Add a new product to the catalogue."""
    service = build_services(settings).products

    try:
        product = Product.create(
            name=name,
            price=Money.of(price),
            stock=stock,
            category=category,
            product_id=product_id,
        )
        created = service.create_product(product)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {created.id} '{created.name}' added at {created.price} ({created.stock} in stock)")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalogue."""
    try:
        products = build_services(settings).products.get_all_products()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<20} {'Price':>10} {'Stock':>7}  Category")
    click.echo("-" * 88)
    for p in products:
        click.echo(f"{p.id:<38} {p.name:<20} {str(p.price):>10} {p.stock:>7}  {p.category}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(settings: Settings, product_id: str) -> None:
    """Show a single product."""
    try:
        product = build_services(settings).products.get_product_by_id(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New unit price (e.g. 29.99).")
@click.option("--stock", type=int, default=None, help="New stock level.")
@click.option("--category", default=None, help="New category.")
@click.pass_obj
def product_update(
    settings: Settings,
    product_id: str,
    name: str | None,
    price: str | None,
    stock: int | None,
    category: str | None,
) -> None:
    """Update a product; fields that are not given keep their value."""
    service = build_services(settings).products

    try:
        current = service.get_product_by_id(product_id)
        product = Product.create(
            name=current.name if name is None else name,
            price=current.price if price is None else Money.of(price),
            stock=current.stock if stock is None else stock,
            category=current.category if category is None else category,
        )
        product.created_at = current.created_at
        updated = service.update_product(product_id, product)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} updated")
    _display_product(updated)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(settings: Settings, product_id: str) -> None:
    """Delete a product.  Orders that reference it are left untouched."""
    try:
        build_services(settings).products.delete_product(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted")
