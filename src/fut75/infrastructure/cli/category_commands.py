"""CLI commands for the category registry."""

from __future__ import annotations

import click

from fut75.application.manage_categories import CategoryHandler
from fut75.domain.exceptions import DomainException
from fut75.infrastructure.bootstrap import category_repository, locks


@click.command("add")
@click.argument("name")
def category_add(name: str) -> None:
    """Register a category."""
    try:
        added = CategoryHandler(category_repository(), locks()).add(name)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Category '{added}' added.")


@click.command("remove")
@click.argument("name")
def category_remove(name: str) -> None:
    """Remove a category."""
    CategoryHandler(category_repository(), locks()).remove(name)
    click.echo(f"Category '{name}' removed.")


@click.command("list")
def category_list() -> None:
    """List categories."""
    names = CategoryHandler(category_repository()).list_all()
    if not names:
        click.echo("No categories found.")
        return
    for name in names:
        click.echo(name)
