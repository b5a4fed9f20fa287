"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.application.update_payment_status import parse_payment_method
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus, PaymentMethod, PaymentStatus
from storefront.domain.model.value_objects import DEFAULT_PAGE_SIZE, Pagination
from storefront.infrastructure.bootstrap import Container


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '12:3,15:1' (variant id : quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'VariantId:Quantity'."
            )
        variant_str, qty_str = pair.split(":", 1)
        try:
            variant_id = int(variant_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(f"Invalid item '{pair}'. Both parts must be integers.")
        specs.append(OrderItemSpec(variant_id=variant_id, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Ship to:  {dto.shipping_address_ref}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipped_at:
        click.echo(f"Shipped:  {dto.shipped_at}")
    if dto.delivered_at:
        click.echo(f"Delivered: {dto.delivered_at}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number}")
    if dto.shipping_method:
        click.echo(f"Carrier:  {dto.shipping_method}")
    if dto.cancellation_reason:
        click.echo(f"Reason:   {dto.cancellation_reason}")
    click.echo()

    click.echo(f"  {'SKU':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.sku:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="Customer user id.")
@click.option("--address", required=True, help="Shipping address reference.")
@click.option("--items", required=True, help="Items as 'VariantId:Qty,VariantId:Qty'.")
@click.option(
    "--payment-method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CREDIT_CARD.value,
    show_default=True,
)
@click.option("--notes", default=None, help="Free-text order notes.")
@click.pass_obj
def order_create(
    container: Container,
    user_id: str,
    address: str,
    items: str,
    payment_method: str,
    notes: str | None,
) -> None:
    """Place an order, reserving stock for every line."""
    specs = _parse_items(items)
    handler = container.create_order_handler()

    try:
        dto = handler.handle(
            user_id=user_id,
            shipping_address_ref=address,
            item_specs=specs,
            payment_method=parse_payment_method(payment_method),
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(container: Container, order_id: int) -> None:
    """Show details of an existing order."""
    handler = container.show_order_handler()

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", required=True, help="Customer user id.")
@click.option("--status", type=click.Choice([s.value for s in OrderStatus]), default=None)
@click.option(
    "--payment-status", type=click.Choice([s.value for s in PaymentStatus]), default=None
)
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=DEFAULT_PAGE_SIZE, show_default=True)
@click.pass_obj
def order_list(
    container: Container,
    user_id: str,
    status: str | None,
    payment_status: str | None,
    page: int,
    page_size: int,
) -> None:
    """List a user's orders, newest first."""
    handler = container.list_orders_handler()

    try:
        result = handler.handle(
            user_id,
            Pagination(page=page, page_size=page_size),
            status=status,
            payment_status=payment_status,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<12} {'Payment':<10} {'Items':>5} {'Total':>12}  Created")
    click.echo("-" * 70)
    for dto in result.orders:
        click.echo(
            f"{dto.id:<6} {dto.status:<12} {dto.payment_status:<10} "
            f"{len(dto.items):>5} {dto.total:>12}  {dto.created_at}"
        )
    click.echo(f"Page {result.page}/{result.total_pages}  ({result.total} orders)")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
@click.pass_obj
def order_cancel(container: Container, order_id: int, reason: str | None) -> None:
    """Cancel a pending or processing order and give its stock back."""
    handler = container.cancel_order_handler()

    try:
        handler.handle(order_id, reason=reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled, stock released.")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--to", "new_status", required=True, type=click.Choice([s.value for s in OrderStatus])
)
@click.option("--notes", default=None, help="Notes to record with the change.")
@click.option("--tracking-number", default=None, help="Carrier tracking number (shipping only).")
@click.option("--shipping-method", default=None, help="Carrier or service (shipping only).")
@click.pass_obj
def order_status(
    container: Container,
    order_id: int,
    new_status: str,
    notes: str | None,
    tracking_number: str | None,
    shipping_method: str | None,
) -> None:
    """Move an order along its fulfilment path."""
    handler = container.update_order_status_handler()

    try:
        dto = handler.handle(
            order_id,
            new_status,
            notes=notes,
            tracking_number=tracking_number,
            shipping_method=shipping_method,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("payment")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--status", "payment_status", required=True,
    type=click.Choice([s.value for s in PaymentStatus]),
)
@click.option(
    "--method", "payment_method", default=None,
    type=click.Choice([m.value for m in PaymentMethod]),
)
@click.pass_obj
def order_payment(
    container: Container,
    order_id: int,
    payment_status: str,
    payment_method: str | None,
) -> None:
    """Record a payment outcome for an order."""
    handler = container.update_payment_status_handler()

    try:
        dto = handler.handle(order_id, payment_status, payment_method)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} payment is {dto.payment_status} ({dto.payment_method}).")
