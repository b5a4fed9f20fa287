"""CLI commands for inventory management."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("set")
@click.option("--sku", required=True, help="Variant SKU.")
@click.option("--quantity", required=True, type=int, help="New stock level.")
@click.pass_obj
def inventory_set(container: Container, sku: str, quantity: int) -> None:
    """Overwrite the stock level of a variant."""
    handler = container.set_stock_handler()

    try:
        new_quantity = handler.handle(sku, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{sku}' set to {new_quantity}")


@click.command("restock")
@click.option("--sku", required=True, help="Variant SKU.")
@click.option("--quantity", required=True, type=int, help="Units received.")
@click.pass_obj
def inventory_restock(container: Container, sku: str, quantity: int) -> None:
    """Add received units to a variant's stock."""
    handler = container.restock_handler()

    try:
        new_quantity = handler.handle(sku, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{sku}' is now {new_quantity}")


@click.command("check")
@click.option("--sku", required=True, help="Variant SKU.")
@click.option("--quantity", required=True, type=int, help="Units wanted.")
@click.pass_obj
def inventory_check(container: Container, sku: str, quantity: int) -> None:
    """Tell whether a quantity is in stock right now (reserves nothing)."""
    handler = container.check_stock_handler()

    try:
        result = handler.handle(sku, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if result.available:
        click.echo(f"'{sku}': {quantity} available (in stock: {result.current_stock})")
    else:
        click.echo(
            f"'{sku}': only {result.current_stock} in stock, short by {result.shortfall}"
        )


@click.command("low")
@click.option("--threshold", type=int, default=None, help="Report variants at or below this level.")
@click.pass_obj
def inventory_low(container: Container, threshold: int | None) -> None:
    """Show variants running low on stock."""
    handler = container.low_stock_report_handler()
    lines = handler.handle(threshold)

    if not lines:
        click.echo("No variants are low on stock.")
        return

    click.echo(f"{'Variant':<8} {'SKU':<20} {'Product':>8} {'Stock':>6}")
    click.echo("-" * 45)
    for line in lines:
        click.echo(
            f"{line.variant_id:<8} {line.sku:<20} {line.product_id:>8} {line.stock_quantity:>6}"
        )
