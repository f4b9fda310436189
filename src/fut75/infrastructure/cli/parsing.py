"""Option parsers shared by the CLI commands."""

from __future__ import annotations

import click

from fut75.application.dto import OrderItemSpec


def _int(raw: str, what: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{raw}' for {what}.")


def parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'Brasil Home:M:2,Flamengo Home:G:1' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        if entry.count(":") < 2:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductName:Size:Quantity'."
            )
        name, size, qty_str = entry.rsplit(":", 2)
        specs.append(
            OrderItemSpec(
                product_name=name.strip(),
                size=size.strip(),
                quantity=_int(qty_str.strip(), f"product '{name.strip()}'"),
            )
        )
    return specs


def parse_return_items(raw: str) -> dict[tuple[str, str], int]:
    """Parse 'Brasil Home:M:1' into {(name, size): qty}."""
    return {
        (spec.product_name, spec.size): spec.quantity for spec in parse_items(raw)
    }


def parse_allocation(raw: str) -> dict[str, int]:
    """Parse 'P:4,M:6' into {size: qty}."""
    result: dict[str, int] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if ":" not in entry:
            raise click.BadParameter(
                f"Invalid allocation '{entry}'. Expected 'Size:Quantity'."
            )
        size, qty_str = entry.rsplit(":", 1)
        result[size.strip()] = _int(qty_str.strip(), f"size '{size.strip()}'")
    return result


def parse_sizes(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    return [s.strip() for s in raw.split(",") if s.strip()]
