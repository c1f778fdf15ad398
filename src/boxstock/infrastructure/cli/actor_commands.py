"""CLI commands for actors."""

from __future__ import annotations

import click

from boxstock.application.manage_actors import ManageActorsHandler
from boxstock.domain.exceptions import DomainException
from boxstock.domain.model.permissions import Role
from boxstock.infrastructure.bootstrap import actor_repository
from boxstock.infrastructure.cli.common import click_error
from boxstock.infrastructure.config import Settings


@click.command("add")
@click.argument("actor_id")
@click.option("--name", "full_name", default=None, help="Full name.")
@click.option("--role", type=click.Choice([r.value for r in Role]), default=Role.USER.value, show_default=True)
@click.option(
    "--permission", "permissions", multiple=True,
    help="Grant 'module:action', e.g. 'rawMaterials:add' (repeatable).",
)
@click.pass_obj
def actor_add(
    settings: Settings,
    actor_id: str,
    full_name: str | None,
    role: str,
    permissions: tuple[str, ...],
) -> None:
    """Add or update an actor. Requires --actor to be an admin once one exists."""
    handler = ManageActorsHandler(actor_repository(settings))

    try:
        dto = handler.add(
            requested_by=settings.actor_id,
            actor_id=actor_id,
            full_name=full_name or actor_id,
            role=Role(role),
            permissions=list(permissions),
        )
    except DomainException as exc:
        raise click_error(exc)

    click.echo(f"Saved actor '{dto.id}' ({dto.role})")


@click.command("list")
@click.pass_obj
def actor_list(settings: Settings) -> None:
    """List all actors."""
    handler = ManageActorsHandler(actor_repository(settings))

    try:
        actors = handler.list_actors()
    except DomainException as exc:
        raise click_error(exc)

    if not actors:
        click.echo("No actors found.")
        return

    click.echo(f"{'ID':<16} {'Name':<24} {'Role':<6} Permissions")
    click.echo("-" * 70)
    for a in actors:
        perms = "all" if a.role == Role.ADMIN.value else (", ".join(a.permissions) or "-")
        click.echo(f"{a.id:<16} {a.full_name:<24} {a.role:<6} {perms}")
