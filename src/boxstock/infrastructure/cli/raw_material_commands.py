"""CLI commands for raw materials."""

from __future__ import annotations

from decimal import Decimal

import click

from boxstock.application.add_raw_material import AddRawMaterialHandler
from boxstock.application.convert_stock import ConvertStockHandler
from boxstock.application.show_inventory import ShowInventoryHandler
from boxstock.application.use_stock import UseStockHandler
from boxstock.domain.exceptions import DomainException
from boxstock.domain.model.inventory import ItemKind, MaterialForm, MaterialType
from boxstock.domain.model.value_objects import Money
from boxstock.infrastructure.bootstrap import access_gate, stock_mutation_service, uow_factory
from boxstock.infrastructure.cli.common import click_error, current_actor_id
from boxstock.infrastructure.cli.inventory_output import echo_inventory
from boxstock.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Material name, e.g. 'Kraft 120gsm'.")
@click.option(
    "--type", "material_type", required=True,
    type=click.Choice([t.value for t in MaterialType]),
)
@click.option("--weight", required=True, help="Weight in kg.")
@click.option("--quantity", default=0, type=int, show_default=True, help="Reels or bags.")
@click.option("--supplier", default=None, help="Supplier id.")
@click.option("--invoice", default=None, help="Supplier invoice number.")
@click.option("--form", "material_form", default=None, type=click.Choice([f.value for f in MaterialForm]))
@click.option("--width", "size_width_cm", default=None, help="Reel/sheet width in cm.")
@click.option("--gsm", default=None, type=int)
@click.option("--bf", default=None, type=int, help="Bursting factor.")
@click.option("--rate", default=None, help="Rate per kg.")
@click.pass_obj
def raw_add(
    settings: Settings,
    name: str,
    material_type: str,
    weight: str,
    quantity: int,
    supplier: str | None,
    invoice: str | None,
    material_form: str | None,
    size_width_cm: str | None,
    gsm: int | None,
    bf: int | None,
    rate: str | None,
) -> None:
    """Register a new raw material lot."""
    handler = AddRawMaterialHandler(stock_mutation_service(settings))

    try:
        dto = handler.handle(
            actor_id=current_actor_id(settings),
            name=name,
            material_type=MaterialType(material_type),
            weight_kg=weight,
            quantity=quantity,
            supplier_id=supplier,
            invoice_number=invoice,
            material_form=MaterialForm(material_form) if material_form else None,
            size_width_cm=Decimal(size_width_cm) if size_width_cm else None,
            gsm=gsm,
            bf=bf,
            rate_per_kg=Money.of(rate) if rate else None,
        )
    except DomainException as exc:
        raise click_error(exc)
    except ArithmeticError:
        raise click.BadParameter(f"Invalid width '{size_width_cm}'.", param_hint="--width")

    click.echo(f"Added raw material {dto.item_id}")
    click.echo(f"Balance: {dto.quantity} pcs / {dto.weight_kg} kg")


@click.command("use")
@click.argument("item_id")
@click.option("--weight", required=True, help="Weight used in kg.")
@click.option("--quantity", default=0, type=int, show_default=True)
@click.option("--purpose", default=None, help="What the material was used for.")
@click.pass_obj
def raw_use(settings: Settings, item_id: str, weight: str, quantity: int, purpose: str | None) -> None:
    """Consume raw material."""
    handler = UseStockHandler(stock_mutation_service(settings))

    try:
        dto = handler.handle(
            actor_id=current_actor_id(settings),
            item_id=item_id,
            weight_kg=weight,
            quantity=quantity,
            purpose=purpose,
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Used {weight} kg of {item_id}")
    click.echo(f"Remaining: {dto.quantity} pcs / {dto.weight_kg} kg")


@click.command("convert")
@click.argument("item_id")
@click.option("--weight", required=True, help="Weight converted in kg.")
@click.option("--to", "conversion_type", required=True, help="What it was converted to, e.g. 'Sheet'.")
@click.option("--quantity", default=0, type=int, show_default=True)
@click.pass_obj
def raw_convert(
    settings: Settings, item_id: str, weight: str, conversion_type: str, quantity: int
) -> None:
    """Convert raw material into another form."""
    handler = ConvertStockHandler(stock_mutation_service(settings))

    try:
        dto = handler.handle(
            actor_id=current_actor_id(settings),
            item_id=item_id,
            weight_kg=weight,
            conversion_type=conversion_type,
            quantity=quantity,
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Converted {weight} kg of {item_id} to {conversion_type}")
    click.echo(f"Remaining: {dto.quantity} pcs / {dto.weight_kg} kg")


@click.command("list")
@click.option("--summary", is_flag=True, help="Group by material and supplier.")
@click.pass_obj
def raw_list(settings: Settings, summary: bool) -> None:
    """Show raw material stock."""
    handler = ShowInventoryHandler(uow_factory(settings), access_gate(settings))

    try:
        report = handler.handle(current_actor_id(settings), ItemKind.RAW_MATERIAL)
    except DomainException as exc:
        raise click_error(exc)

    echo_inventory(report, "Supplier", summary)
