"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from fut75.application.cancel_order import CancelOrderHandler
from fut75.application.checkout import CheckoutHandler
from fut75.application.confirm_order import ConfirmOrderHandler
from fut75.application.create_order import CreateOrderHandler
from fut75.application.dto import OrderDTO
from fut75.application.return_order import ReturnOrderHandler
from fut75.application.show_order import ListOrdersHandler, ShowOrderHandler
from fut75.domain.exceptions import DomainException
from fut75.domain.model.order import OrderStatus
from fut75.infrastructure.bootstrap import (
    locks,
    order_repository,
    product_repository,
    stock_ledger,
    whatsapp_number,
)
from fut75.infrastructure.cli.parsing import parse_items, parse_return_items


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.sequence}  {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}  {dto.customer_phone}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()

    if dto.has_returns:
        click.echo(
            f"  {'Product':<28} {'Size':<5} {'Qty':>4} {'Returned':>9} {'Price':>12} {'Total':>12}"
        )
        click.echo(f"  {'-'*75}")
        for item in dto.items:
            click.echo(
                f"  {item.product_name:<28} {item.size:<5} {item.quantity:>4} "
                f"{item.returned_quantity:>9} {item.unit_price:>12} {item.line_total:>12}"
            )
        click.echo(f"  {'-'*75}")
    else:
        click.echo(f"  {'Product':<28} {'Size':<5} {'Qty':>4} {'Price':>12} {'Total':>12}")
        click.echo(f"  {'-'*65}")
        for item in dto.items:
            click.echo(
                f"  {item.product_name:<28} {item.size:<5} {item.quantity:>4} "
                f"{item.unit_price:>12} {item.line_total:>12}"
            )
        click.echo(f"  {'-'*65}")

    click.echo(f"  {'Order Total':<40} {dto.total:>24}")


@click.command("create")
@click.option("--items", required=True, help="Items as 'Product:Size:Qty,Product:Size:Qty'.")
@click.option("--customer", default=None, help="Customer name (default: STORE).")
@click.option("--phone", default=None, help="Customer phone.")
@click.option(
    "--debit/--pending", "debit", default=False,
    help="Take stock now and complete the order, or leave it pending.",
)
def order_create(items: str, customer: str | None, phone: str | None, debit: bool) -> None:
    """Create an order from the admin console."""
    specs = parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        ledger=stock_ledger(),
    )

    try:
        dto = handler.handle(
            specs,
            debit_stock_immediately=debit,
            customer_name=customer,
            customer_phone=phone,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("checkout")
@click.option("--items", required=True, help="Items as 'Product:Size:Qty,Product:Size:Qty'.")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Customer WhatsApp number.")
def order_checkout(items: str, customer: str, phone: str) -> None:
    """Check out a customer cart and print the WhatsApp message."""
    specs = parse_items(items)

    handler = CheckoutHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        destination=whatsapp_number(),
    )

    try:
        cart = handler.stage(specs)
        dto = handler.handle(cart, customer, phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(dto.message)
    click.echo()
    click.echo(f"Order {dto.order_id} recorded as pending.")
    click.echo(dto.link)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option(
    "--status", default=None,
    type=click.Choice([s.value for s in OrderStatus]),
    help="Only orders in this status.",
)
def order_list(status: str | None) -> None:
    """List orders, most recent first."""
    rows = ListOrdersHandler(order_repo=order_repository()).handle(status)

    if not rows:
        click.echo("No orders found.")
        return

    click.echo(f"{'#':>4}  {'ID':<32}  {'Customer':<20} {'Status':<18} {'Units':>5} {'Total':>12}")
    click.echo("-" * 98)
    for row in rows:
        click.echo(
            f"{row.sequence:>4}  {row.id:<32}  {row.customer_name:<20} "
            f"{row.status:<18} {row.item_count:>5} {row.total:>12}"
        )


@click.command("confirm")
@click.option("--id", "order_id", required=True, help="Order ID to confirm.")
def order_confirm(order_id: str) -> None:
    """Complete a pending order (takes its stock)."""
    handler = ConfirmOrderHandler(order_repo=order_repository(), ledger=stock_ledger())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} completed, stock updated.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
def order_cancel(order_id: str) -> None:
    """Cancel a pending order."""
    handler = CancelOrderHandler(order_repo=order_repository(), locks=locks())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} cancelled.")


@click.command("return")
@click.option("--id", "order_id", required=True, help="Order ID to return.")
@click.option("--partial", is_flag=True, default=False, help="Partial return mode.")
@click.option("--items", "items_str", default=None, help="Items as 'Product:Size:Qty,...'.")
def order_return(order_id: str, partial: bool, items_str: str | None) -> None:
    """Return a completed order (puts stock back).

    Without --partial: returns every unit still out.
    With --partial --items: returns the listed quantities only.
    """
    if partial and not items_str:
        raise click.ClickException("--partial requires --items")

    handler = ReturnOrderHandler(order_repo=order_repository(), ledger=stock_ledger())
    partial_items = parse_return_items(items_str) if items_str else None

    try:
        status = handler.handle(order_id, partial_items=partial_items)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} {status.value.replace('_', ' ')}, stock updated.")
