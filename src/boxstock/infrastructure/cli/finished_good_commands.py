"""CLI commands for finished goods."""

from __future__ import annotations

from decimal import Decimal

import click

from boxstock.application.add_finished_good import AddFinishedGoodHandler
from boxstock.application.dispatch_finished_good import DispatchFinishedGoodHandler
from boxstock.application.show_inventory import ShowInventoryHandler
from boxstock.domain.exceptions import DomainException
from boxstock.domain.model.inventory import ItemKind
from boxstock.domain.model.value_objects import Money
from boxstock.infrastructure.bootstrap import access_gate, stock_mutation_service, uow_factory
from boxstock.infrastructure.cli.common import click_error, current_actor_id
from boxstock.infrastructure.cli.inventory_output import echo_inventory
from boxstock.infrastructure.config import Settings


def _parse_dimensions(raw: str) -> tuple[Decimal, Decimal, Decimal]:
    """Parse 'LxWxH' in cm, e.g. '30x20x15'."""
    parts = raw.lower().replace("×", "x").split("x")
    if len(parts) != 3:
        raise click.BadParameter(
            f"Invalid dimensions '{raw}'. Expected 'LxWxH' in cm.", param_hint="--size"
        )
    try:
        length, width, height = (Decimal(p.strip()) for p in parts)
    except ArithmeticError:
        raise click.BadParameter(
            f"Invalid dimensions '{raw}'. Expected numbers.", param_hint="--size"
        )
    return length, width, height


@click.command("add")
@click.option("--name", required=True, help="Box name.")
@click.option("--quantity", required=True, type=int, help="Number of boxes.")
@click.option("--unit-weight", required=True, help="Weight of one box in kg.")
@click.option("--customer", default=None, help="Customer id.")
@click.option("--size", default="0x0x0", show_default=True, help="Dimensions 'LxWxH' in cm.")
@click.option("--ply", default=3, type=int, show_default=True, help="Number of ply.")
@click.option("--rate", default=None, help="Rate per piece.")
@click.pass_obj
def box_add(
    settings: Settings,
    name: str,
    quantity: int,
    unit_weight: str,
    customer: str | None,
    size: str,
    ply: int,
    rate: str | None,
) -> None:
    """Register a new lot of finished boxes."""
    length, width, height = _parse_dimensions(size)
    handler = AddFinishedGoodHandler(stock_mutation_service(settings))

    try:
        dto = handler.handle(
            actor_id=current_actor_id(settings),
            box_name=name,
            quantity=quantity,
            unit_weight_kg=unit_weight,
            customer_id=customer,
            length_cm=length,
            width_cm=width,
            height_cm=height,
            number_of_ply=ply,
            rate_per_piece=Money.of(rate) if rate else None,
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Added finished good {dto.item_id}")
    click.echo(f"Balance: {dto.quantity} pcs / {dto.weight_kg} kg")


@click.command("dispatch")
@click.argument("item_id")
@click.option("--quantity", required=True, type=int, help="Boxes shipped.")
@click.option("--notes", default=None, help="Challan number, vehicle, ...")
@click.pass_obj
def box_dispatch(settings: Settings, item_id: str, quantity: int, notes: str | None) -> None:
    """Dispatch boxes to the customer."""
    handler = DispatchFinishedGoodHandler(stock_mutation_service(settings))

    try:
        dto = handler.handle(
            actor_id=current_actor_id(settings),
            item_id=item_id,
            quantity=quantity,
            notes=notes,
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Dispatched {quantity} pcs of {item_id}")
    click.echo(f"Remaining: {dto.quantity} pcs / {dto.weight_kg} kg")


@click.command("list")
@click.option("--summary", is_flag=True, help="Group by box name and customer.")
@click.pass_obj
def box_list(settings: Settings, summary: bool) -> None:
    """Show finished goods stock."""
    handler = ShowInventoryHandler(uow_factory(settings), access_gate(settings))

    try:
        report = handler.handle(current_actor_id(settings), ItemKind.FINISHED_GOOD)
    except DomainException as exc:
        raise click_error(exc)

    echo_inventory(report, "Customer", summary)
