"""Application service: Manage Actors use case.

Only an admin may add or update actors, except when the directory has
no admin yet: then the first admin can be created without one.
"""

from __future__ import annotations

from boxstock.application.dto import ActorDTO
from boxstock.domain.exceptions import UnauthorizedError, ValidationError
from boxstock.domain.model.permissions import Actor, PermissionMatrix, Role
from boxstock.domain.repository.actor_repository import ActorRepository


class ManageActorsHandler:

    def __init__(self, actor_repo: ActorRepository) -> None:
        self._actor_repo = actor_repo

    def add(
        self,
        requested_by: str | None,
        actor_id: str,
        full_name: str,
        role: Role = Role.USER,
        permissions: list[str] | None = None,
    ) -> ActorDTO:
        if not actor_id or not actor_id.strip():
            raise ValidationError("Actor id is required")
        actor_id = actor_id.strip()
        self._check_admin(requested_by, role)

        actor = Actor(
            id=actor_id,
            full_name=(full_name or "").strip() or actor_id,
            role=role,
            permissions=PermissionMatrix.of(*(permissions or [])),
        )
        self._actor_repo.save(actor)
        return to_dto(actor)

    def list_actors(self) -> list[ActorDTO]:
        return [to_dto(a) for a in sorted(self._actor_repo.list_all(), key=lambda a: a.id)]

    def _check_admin(self, requested_by: str | None, new_role: Role) -> None:
        has_admin = any(a.is_admin for a in self._actor_repo.list_all())
        if not has_admin:
            if new_role is not Role.ADMIN:
                raise ValidationError("The first actor must be an admin")
            return

        requester = self._actor_repo.get_by_id(requested_by) if requested_by else None
        if requester is None or not requester.is_admin:
            raise UnauthorizedError("Only an admin can manage actors")


def to_dto(actor: Actor) -> ActorDTO:
    return ActorDTO(
        id=actor.id,
        full_name=actor.full_name,
        role=actor.role.value,
        permissions=sorted(str(p) for p in actor.permissions.granted),
    )
