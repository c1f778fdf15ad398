"""Domain service: Access Policy Gate.

Maps each stock operation to the ``(module, action)`` permission it
needs and checks the acting user against it before anything is written.
"""

from __future__ import annotations

from boxstock.domain.exceptions import UnauthorizedError
from boxstock.domain.model.inventory import ItemKind
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.model.permissions import Action, Actor, Module
from boxstock.domain.repository.actor_repository import ActorRepository


def required_permission(activity_type: ActivityType, kind: ItemKind) -> tuple[Module, Action]:
    """Permission needed to apply ``activity_type`` to an item of ``kind``.

    Adding stock needs ``add`` on the item's module, removing an item
    needs ``delete``, every other movement changes the row and needs
    ``modify``.
    """
    if activity_type is ActivityType.ADD:
        return kind.module, Action.ADD
    if activity_type is ActivityType.REMOVED:
        return kind.module, Action.DELETE
    return kind.module, Action.MODIFY


class AccessPolicyGate:

    def __init__(self, actor_repo: ActorRepository) -> None:
        self._actor_repo = actor_repo

    def resolve(self, actor_id: str) -> Actor:
        actor = self._actor_repo.get_by_id(actor_id)
        if actor is None:
            raise UnauthorizedError(f"Unknown actor '{actor_id}'")
        return actor

    def authorize(self, actor_id: str, module: Module, action: Action) -> Actor:
        """Return the actor if permitted, otherwise raise UnauthorizedError."""
        actor = self.resolve(actor_id)
        if not actor.can(module, action):
            raise UnauthorizedError(
                f"{actor.full_name} is not allowed to {action.value} {module.value}"
            )
        return actor

    def authorize_activity(
        self, actor_id: str, activity_type: ActivityType, kind: ItemKind
    ) -> Actor:
        module, action = required_permission(activity_type, kind)
        return self.authorize(actor_id, module, action)
