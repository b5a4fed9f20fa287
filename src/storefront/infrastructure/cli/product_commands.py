"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.catalog import SORT_FIELDS, ProductFilters, SortSpec
from storefront.domain.model.value_objects import DEFAULT_PAGE_SIZE, Money, Pagination
from storefront.infrastructure.bootstrap import Container


@click.command("list")
@click.option("--category", "category_id", type=int, default=None, help="Category id.")
@click.option("--min-price", default=None, help="Lowest base price (e.g. 50.00).")
@click.option("--max-price", default=None, help="Highest base price (e.g. 150.00).")
@click.option("--search", default=None, help="Match product name or description.")
@click.option("--color", "color_ids", type=int, multiple=True, help="Color id (repeatable).")
@click.option("--size", "size_ids", type=int, multiple=True, help="Size id (repeatable).")
@click.option("--sort", "sort_field", type=click.Choice(sorted(SORT_FIELDS)), default="created_at")
@click.option("--order", "direction", type=click.Choice(["asc", "desc"]), default="desc")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=DEFAULT_PAGE_SIZE, show_default=True)
@click.pass_obj
def product_list(
    container: Container,
    category_id: int | None,
    min_price: str | None,
    max_price: str | None,
    search: str | None,
    color_ids: tuple[int, ...],
    size_ids: tuple[int, ...],
    sort_field: str,
    direction: str,
    page: int,
    page_size: int,
) -> None:
    """List products that have stock, one line per product."""
    handler = container.list_products_handler()

    try:
        filters = ProductFilters(
            category_id=category_id,
            min_price=Money.of(min_price) if min_price is not None else None,
            max_price=Money.of(max_price) if max_price is not None else None,
            search_text=search,
            color_ids=frozenset(color_ids),
            size_ids=frozenset(size_ids),
        )
        result = handler.handle(
            filters,
            Pagination(page=page, page_size=page_size),
            SortSpec(field=sort_field, direction=direction),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Stock':>6}  {'Colors':<20} Sizes")
    click.echo("-" * 80)
    for p in result.items:
        click.echo(
            f"{p.id:<6} {p.name:<24} {p.base_price:>10} {p.total_stock:>6}  "
            f"{', '.join(p.colors):<20} {', '.join(p.sizes)}"
        )
    click.echo(f"Page {result.page}/{result.total_pages}  ({result.total} products)")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_show(container: Container, product_id: int) -> None:
    """Show a product with all of its variants."""
    handler = container.show_product_handler()

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}'  base price {dto.base_price}")
    click.echo(f"Price range: {dto.price_range}   Total stock: {dto.total_stock}")
    click.echo()
    if not dto.variants:
        click.echo("  No active variants.")
        return
    click.echo(f"  {'ID':<6} {'SKU':<16} {'Color':<10} {'Size':<6} {'Price':>10} {'Stock':>6}")
    click.echo(f"  {'-'*59}")
    for v in dto.variants:
        click.echo(
            f"  {v.id:<6} {v.sku:<16} {v.color:<10} {v.size:<6} {v.unit_price:>10} {v.stock_quantity:>6}"
        )
