"""CLI dashboard."""

from __future__ import annotations

import click

from boxstock.application.show_dashboard import ShowDashboardHandler
from boxstock.domain.exceptions import DomainException
from boxstock.infrastructure.bootstrap import uow_factory
from boxstock.infrastructure.cli.common import click_error
from boxstock.infrastructure.config import Settings


@click.command("dashboard")
@click.pass_obj
def dashboard(settings: Settings) -> None:
    """Show stock totals and recent activity."""
    handler = ShowDashboardHandler(uow_factory(settings))

    try:
        dto = handler.handle()
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"{'':<16} {'Items':>6} {'Qty':>8} {'Weight kg':>12} {'Amount':>14}")
    click.echo("-" * 60)
    for label, totals in (
        ("Raw materials", dto.raw_materials),
        ("Finished goods", dto.finished_goods),
        ("Wastage sales", dto.wastage),
    ):
        click.echo(
            f"{label:<16} {totals.item_count:>6} {totals.total_quantity:>8} "
            f"{totals.total_weight_kg:>12} {totals.total_amount:>14}"
        )
    click.echo(f"Average scrap rate: {dto.wastage_average_rate}/kg")
    click.echo()
    click.echo("  ".join(f"{name}: {n}" for name, n in dto.activity_counts.items()))

    if dto.recent_activity:
        click.echo()
        click.echo("Recent activity:")
        for e in dto.recent_activity:
            click.echo(f"  {e.timestamp}  {e.activity_type:<9} {e.item_id}  {e.notes}")
