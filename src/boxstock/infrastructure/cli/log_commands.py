"""CLI commands for the stock ledger."""

from __future__ import annotations

from datetime import datetime

import click

from boxstock.application.show_stock_logs import ShowStockLogsHandler
from boxstock.application.verify_ledger import VerifyLedgerHandler
from boxstock.domain.exceptions import DomainException
from boxstock.domain.model.ledger import ActivityType
from boxstock.infrastructure.bootstrap import access_gate, uow_factory
from boxstock.infrastructure.cli.common import click_error, current_actor_id, to_utc
from boxstock.infrastructure.config import Settings


@click.command("show")
@click.option("--item", "item_id", default=None, help="Only this item.")
@click.option(
    "--activity", "activities", multiple=True,
    type=click.Choice([a.value for a in ActivityType], case_sensitive=False),
    help="Only these activity types (repeatable).",
)
@click.option("--by", "performed_by", default=None, help="Only entries by this actor.")
@click.option("--since", type=click.DateTime(), default=None, help="From (UTC, inclusive).")
@click.option("--until", type=click.DateTime(), default=None, help="To (UTC, exclusive).")
@click.option("--limit", default=50, type=click.IntRange(min=1), show_default=True)
@click.pass_obj
def logs_show(
    settings: Settings,
    item_id: str | None,
    activities: tuple[str, ...],
    performed_by: str | None,
    since: datetime | None,
    until: datetime | None,
    limit: int,
) -> None:
    """Show stock ledger entries, newest first."""
    handler = ShowStockLogsHandler(uow_factory(settings), access_gate(settings))

    try:
        report = handler.handle(
            actor_id=current_actor_id(settings),
            item_id=item_id,
            activity_types=frozenset(ActivityType.parse(a) for a in activities),
            performed_by=performed_by,
            since=to_utc(since),
            until=to_utc(until),
            limit=limit,
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo("  ".join(f"{name}: {n}" for name, n in report.counts.items()))
    click.echo()
    if not report.entries:
        click.echo("No ledger entries found.")
        return

    click.echo(
        f"{'Time':<23} {'Activity':<9} {'Item':<36} {'Qty':>6} {'Weight kg':>11}  {'By':<12} Notes"
    )
    click.echo("-" * 110)
    for e in report.entries:
        click.echo(
            f"{e.timestamp:<23} {e.activity_type:<9} {e.item_id:<36} {e.quantity:>6} "
            f"{e.weight_kg:>11}  {e.actor_id:<12} {e.notes}"
        )


@click.command("verify")
@click.pass_obj
def logs_verify(settings: Settings) -> None:
    """Check every item's balance against a replay of its ledger."""
    handler = VerifyLedgerHandler(uow_factory(settings), access_gate(settings))

    try:
        mismatches = handler.handle(current_actor_id(settings))
    except DomainException as exc:
        raise click_error(exc)

    if not mismatches:
        click.echo("Ledger and balances agree.")
        return

    for m in mismatches:
        click.echo(f"{m.item_id}  {m.name}: stored {m.stored}, ledger {m.replayed}")
    raise click.ClickException(f"{len(mismatches)} item(s) disagree with the ledger")
