import click

from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.cli.db_commands import db_init
from storefront.infrastructure.cli.inventory_commands import (
    inventory_check,
    inventory_low,
    inventory_restock,
    inventory_set,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_payment,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import product_list, product_show
from storefront.infrastructure.config import Settings
from storefront.infrastructure.log_setup import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: inventory and order consistency core"""
    if ctx.obj is not None:
        return
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings.log_level)
    ctx.obj = Container(settings)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def inventory() -> None:
    """Manage variant stock."""


@cli.group()
def db() -> None:
    """Manage the database."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_payment)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_list)
product.add_command(product_show)
inventory.add_command(inventory_check)
inventory.add_command(inventory_low)
inventory.add_command(inventory_restock)
inventory.add_command(inventory_set)
db.add_command(db_init)
