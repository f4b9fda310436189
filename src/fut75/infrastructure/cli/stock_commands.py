"""CLI commands for per-size stock."""

from __future__ import annotations

import click

from fut75.application.manage_stock import AdjustStockHandler, ShowInventoryHandler
from fut75.domain.exceptions import DomainException
from fut75.infrastructure.bootstrap import product_repository, stock_ledger


@click.command("show")
def stock_show() -> None:
    """Show stock levels per size."""
    lines = ShowInventoryHandler(product_repo=product_repository()).handle()

    if not lines:
        click.echo("No products found.")
        return

    for line in lines:
        sizes = "  ".join(
            f"{size}:{'-' if qty is None else qty}" for size, qty in line.by_size
        )
        click.echo(f"#{line.product_id:<4} {line.product_name:<32} {line.total:>5} un.   {sizes}")


@click.command("set")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--size", required=True, help="Size label.")
@click.option("--quantity", required=True, type=int, help="Units in stock for this size.")
def stock_set(product_id: str, size: str, quantity: int) -> None:
    """Set the stock of one size."""
    handler = AdjustStockHandler(ledger=stock_ledger())

    try:
        handler.set_quantity(product_id, size, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product #{product_id} size {size} set to {quantity}")


@click.command("add-size")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--size", required=True, help="New size label (e.g. XG).")
@click.option("--quantity", default=0, type=int, help="Initial units.")
def stock_add_size(product_id: str, size: str, quantity: int) -> None:
    """Add a size to a product."""
    handler = AdjustStockHandler(ledger=stock_ledger())

    try:
        handler.add_size(product_id, size, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Size {size} added to product #{product_id}")


@click.command("remove-size")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--size", required=True, help="Size label to remove.")
def stock_remove_size(product_id: str, size: str) -> None:
    """Remove a size (and its stock) from a product."""
    handler = AdjustStockHandler(ledger=stock_ledger())

    try:
        handler.remove_size(product_id, size)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Size {size} removed from product #{product_id}")
