"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from fut75.application.register_product import RegisterProductHandler
from fut75.application.update_product import DeleteProductHandler, UpdateProductHandler
from fut75.domain.exceptions import DomainException
from fut75.domain.model.size import sort_sizes
from fut75.infrastructure.bootstrap import category_repository, locks, product_repository
from fut75.infrastructure.cli.parsing import parse_allocation, parse_sizes


@click.command("register")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Registered category.")
@click.option("--price", required=True, help="Price (e.g. 149.90).")
@click.option("--stock", "total_stock", required=True, type=int, help="Total units in stock.")
@click.option("--allocation", default="", help="Units per size as 'P:4,M:6'.")
@click.option("--sizes", default=None, help="Sizes as 'P,M,G' (default: by category).")
@click.option("--image", "image_url", default="", help="Image URL.")
def product_register(
    name: str,
    category: str,
    price: str,
    total_stock: int,
    allocation: str,
    sizes: str | None,
    image_url: str,
) -> None:
    """Register a new product with its stock split by size."""
    handler = RegisterProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
        locks=locks(),
    )

    try:
        product = handler.handle(
            name=name,
            category=category,
            price=price,
            total_stock=total_stock,
            allocation=parse_allocation(allocation),
            sizes=parse_sizes(sizes),
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' registered at {product.price} "
        f"({product.stock} un.)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<32} {'Category':<18} {'Sizes':<18} {'Price':>12} {'Stock':>6}")
    click.echo("-" * 97)
    for p in sorted(products, key=lambda p: int(p.id)):
        sizes = ",".join(sort_sizes(p.sizes))
        click.echo(
            f"{p.id:<6} {p.name:<32} {p.category:<18} {sizes:<18} {str(p.price):>12} {p.stock:>6}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, help="New category.")
@click.option("--price", default=None, help="New price (e.g. 129.90).")
def product_update(
    product_id: str, name: str | None, category: str | None, price: str | None
) -> None:
    """Edit a product's name, category or price."""
    handler = UpdateProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
        locks=locks(),
    )

    try:
        product = handler.handle(product_id, name=name, category=category, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated: {product.name} ({product.category}) {product.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Delete this product permanently?")
def product_delete(product_id: str) -> None:
    """Delete a product from the catalog."""
    handler = DeleteProductHandler(product_repo=product_repository(), locks=locks())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
