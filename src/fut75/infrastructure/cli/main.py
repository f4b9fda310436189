import click

from fut75.infrastructure.cli.category_commands import (
    category_add,
    category_list,
    category_remove,
)
from fut75.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_confirm,
    order_create,
    order_list,
    order_return,
    order_show,
)
from fut75.infrastructure.cli.product_commands import (
    product_delete,
    product_list,
    product_register,
    product_update,
)
from fut75.infrastructure.cli.stock_commands import (
    stock_add_size,
    stock_remove_size,
    stock_set,
    stock_show,
)
from fut75.infrastructure.logging import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging on stderr.")
def cli(verbose: bool) -> None:
    """FUT75 Store: catalog, stock and orders"""
    configure_logging(verbose)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def stock() -> None:
    """Manage stock per size."""


@cli.group()
def category() -> None:
    """Manage categories."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_confirm)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_return)
order.add_command(order_show)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_register)
product.add_command(product_update)
stock.add_command(stock_add_size)
stock.add_command(stock_remove_size)
stock.add_command(stock_set)
stock.add_command(stock_show)
category.add_command(category_add)
category.add_command(category_list)
category.add_command(category_remove)
