"""CLI commands that apply to any inventory item."""

from __future__ import annotations

import click

from boxstock.application.remove_item import RemoveItemHandler
from boxstock.application.restock_item import RestockItemHandler
from boxstock.application.write_off_stock import WriteOffStockHandler
from boxstock.domain.exceptions import DomainException
from boxstock.infrastructure.bootstrap import stock_mutation_service
from boxstock.infrastructure.cli.common import click_error, current_actor_id
from boxstock.infrastructure.config import Settings


@click.command("restock")
@click.argument("item_id")
@click.option("--quantity", default=0, type=int, show_default=True)
@click.option("--weight", default="0", show_default=True, help="Weight in kg.")
@click.option("--notes", default=None)
@click.pass_obj
def stock_restock(
    settings: Settings, item_id: str, quantity: int, weight: str, notes: str | None
) -> None:
    """Add stock to an existing item."""
    handler = RestockItemHandler(stock_mutation_service(settings))

    try:
        dto = handler.handle(
            actor_id=current_actor_id(settings),
            item_id=item_id,
            quantity=quantity,
            weight_kg=weight,
            notes=notes,
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Restocked {item_id}")
    click.echo(f"Balance: {dto.quantity} pcs / {dto.weight_kg} kg")


@click.command("write-off")
@click.argument("item_id")
@click.option("--quantity", default=0, type=int, show_default=True)
@click.option("--weight", default="0", show_default=True, help="Weight in kg.")
@click.option("--reason", default=None)
@click.pass_obj
def stock_write_off(
    settings: Settings, item_id: str, quantity: int, weight: str, reason: str | None
) -> None:
    """Record damaged or scrapped stock as wastage."""
    handler = WriteOffStockHandler(stock_mutation_service(settings))

    try:
        dto = handler.handle(
            actor_id=current_actor_id(settings),
            item_id=item_id,
            quantity=quantity,
            weight_kg=weight,
            reason=reason,
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Wrote off stock from {item_id}")
    click.echo(f"Remaining: {dto.quantity} pcs / {dto.weight_kg} kg")


@click.command("remove")
@click.argument("item_id")
@click.option("--notes", default=None)
@click.confirmation_option(prompt="Delete this item and write off its remaining stock?")
@click.pass_obj
def stock_remove(settings: Settings, item_id: str, notes: str | None) -> None:
    """Delete an item."""
    handler = RemoveItemHandler(stock_mutation_service(settings))

    try:
        dto = handler.handle(current_actor_id(settings), item_id, notes=notes)
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Removed {item_id} (ledger entry {dto.ledger_entry_id})")
