from __future__ import annotations

from pathlib import Path

import click

from boxstock.infrastructure.cli.actor_commands import actor_add, actor_list
from boxstock.infrastructure.cli.finished_good_commands import box_add, box_dispatch, box_list
from boxstock.infrastructure.cli.log_commands import logs_show, logs_verify
from boxstock.infrastructure.cli.raw_material_commands import raw_add, raw_convert, raw_list, raw_use
from boxstock.infrastructure.cli.report_commands import dashboard
from boxstock.infrastructure.cli.stock_commands import stock_remove, stock_restock, stock_write_off
from boxstock.infrastructure.cli.wastage_commands import wastage_list, wastage_sell
from boxstock.infrastructure.config import Settings
from boxstock.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the database and actors.json (env BOXSTOCK_DATA_DIR).",
)
@click.option("--actor", default=None, help="Acting user id (env BOXSTOCK_ACTOR).")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (env BOXSTOCK_LOG_LEVEL).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None, actor: str | None, log_level: str | None) -> None:
    """boxstock — stock ledger for corrugated-box production"""
    settings = Settings.from_env().with_overrides(
        data_dir=Path(data_dir) if data_dir else None,
        actor_id=actor,
        log_level=log_level.upper() if log_level else None,
    )
    configure_logging(level=settings.log_level, json_lines=settings.log_json)
    ctx.obj = settings


@cli.group()
def raw() -> None:
    """Raw materials: paper, stitching wire, gum powder."""


@cli.group()
def box() -> None:
    """Finished goods (boxes)."""


@cli.group()
def stock() -> None:
    """Movements that apply to any item."""


@cli.group()
def logs() -> None:
    """Stock ledger."""


@cli.group()
def wastage() -> None:
    """Scrap sales."""


@cli.group()
def actors() -> None:
    """Users and their permissions."""


# Register subcommands
raw.add_command(raw_add)
raw.add_command(raw_use)
raw.add_command(raw_convert)
raw.add_command(raw_list)
box.add_command(box_add)
box.add_command(box_dispatch)
box.add_command(box_list)
stock.add_command(stock_restock)
stock.add_command(stock_write_off)
stock.add_command(stock_remove)
logs.add_command(logs_show)
logs.add_command(logs_verify)
wastage.add_command(wastage_sell)
wastage.add_command(wastage_list)
actors.add_command(actor_add)
actors.add_command(actor_list)
cli.add_command(dashboard)
