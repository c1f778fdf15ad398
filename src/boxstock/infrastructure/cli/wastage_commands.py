"""CLI commands for scrap sales."""

from __future__ import annotations

from datetime import datetime

import click

from boxstock.application.record_wastage_sale import RecordWastageSaleHandler
from boxstock.application.show_wastage_sales import ShowWastageSalesHandler
from boxstock.domain.exceptions import DomainException
from boxstock.infrastructure.bootstrap import access_gate, uow_factory, wastage_sale_service
from boxstock.infrastructure.cli.common import click_error, current_actor_id
from boxstock.infrastructure.config import Settings


@click.command("sell")
@click.option("--description", required=True, help="What was sold, e.g. 'Trimmings'.")
@click.option("--weight", required=True, help="Weight in kg.")
@click.option("--amount", required=True, help="Total sale amount.")
@click.option("--quantity", default=0, type=int, show_default=True, help="Bags or bundles.")
@click.option("--date", "sale_date", type=click.DateTime(["%Y-%m-%d"]), default=None)
@click.option("--notes", default=None)
@click.pass_obj
def wastage_sell(
    settings: Settings,
    description: str,
    weight: str,
    amount: str,
    quantity: int,
    sale_date: datetime | None,
    notes: str | None,
) -> None:
    """Record a scrap sale."""
    handler = RecordWastageSaleHandler(wastage_sale_service(settings))

    try:
        dto = handler.handle(
            actor_id=current_actor_id(settings),
            item_description=description,
            weight_kg=weight,
            sale_amount=amount,
            quantity=quantity,
            sale_date=sale_date.date() if sale_date else None,
            notes=notes,
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Recorded sale {dto.id}: {dto.weight_kg} kg for {dto.sale_amount} ({dto.rate_per_kg}/kg)")


@click.command("list")
@click.pass_obj
def wastage_list(settings: Settings) -> None:
    """Show scrap sales, newest first."""
    handler = ShowWastageSalesHandler(uow_factory(settings), access_gate(settings))

    try:
        sales = handler.handle(current_actor_id(settings))
    except DomainException as exc:
        raise click_error(exc)

    if not sales:
        click.echo("No wastage sales recorded.")
        return

    click.echo(f"{'Date':<10}  {'Description':<24} {'Qty':>5} {'Weight kg':>11} {'Amount':>12} {'Rate/kg':>10}")
    click.echo("-" * 78)
    for s in sales:
        click.echo(
            f"{s.sale_date:<10}  {s.item_description:<24} {s.quantity:>5} "
            f"{s.weight_kg:>11} {s.sale_amount:>12} {s.rate_per_kg:>10}"
        )
