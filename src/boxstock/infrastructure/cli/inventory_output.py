"""Table rendering for inventory listings."""

from __future__ import annotations

import click

from boxstock.application.dto import InventoryReportDTO


def echo_inventory(report: InventoryReportDTO, counterpart: str, summary: bool) -> None:
    if not report.lines:
        click.echo("No items found.")
        return

    if summary:
        click.echo(
            f"{'Name':<24} {counterpart:<14} {'Items':>5} {'Qty':>7} {'Weight kg':>12} {'Amount':>14}"
        )
        click.echo("-" * 81)
        for row in report.groups:
            click.echo(
                f"{row.name:<24} {row.counterpart_id:<14} {row.item_count:>5} "
                f"{row.total_quantity:>7} {row.total_weight_kg:>12} {row.total_amount:>14}"
            )
        return

    click.echo(
        f"{'ID':<36}  {'Name':<24} {counterpart:<14} {'Qty':>7} {'Weight kg':>12} {'Amount':>14}"
    )
    click.echo("-" * 113)
    for line in report.lines:
        click.echo(
            f"{line.item_id:<36}  {line.name:<24} {line.counterpart_id:<14} "
            f"{line.quantity:>7} {line.weight_kg:>12} {line.amount:>14}"
        )
