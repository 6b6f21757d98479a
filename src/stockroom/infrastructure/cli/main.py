import click
import uvicorn

from stockroom.domain.exceptions import ValidationError
from stockroom.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_update,
)
from stockroom.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from stockroom.infrastructure.config import Settings
from stockroom.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Stockroom — products, stock and orders"""
    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings.log_level, settings.log_json)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    uvicorn.run(
        "stockroom.infrastructure.http.app:create_app",
        factory=True,
        host=host,
        port=port,
    )


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
