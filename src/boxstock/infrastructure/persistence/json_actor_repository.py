"""JSON-file-backed implementation of ActorRepository.

Permission flags are validated when the file is read, so a typo such as
``"rawMaterial"`` fails loudly instead of silently denying access.
"""

from __future__ import annotations

import json
from pathlib import Path

from boxstock.domain.exceptions import UnauthorizedError, ValidationError
from boxstock.domain.model.permissions import Actor, PermissionMatrix, Role
from boxstock.domain.repository.actor_repository import ActorProvider, ActorRepository


class JsonActorRepository(ActorRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ActorRepository interface --------------------------------------------

    def get_by_id(self, actor_id: str) -> Actor | None:
        return self._load().get(actor_id)

    def list_all(self) -> list[Actor]:
        return list(self._load().values())

    def save(self, actor: Actor) -> None:
        actors = self._load()
        actors[actor.id] = actor
        self._persist(actors)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Actor]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{self._file_path} is not valid JSON: {exc}") from exc
        actors: dict[str, Actor] = {}
        for item in raw:
            try:
                role = Role(item.get("role", "user"))
            except ValueError:
                raise ValidationError(
                    f"Actor '{item.get('id')}' has unknown role {item.get('role')!r}"
                ) from None
            actors[item["id"]] = Actor(
                id=item["id"],
                full_name=item.get("full_name") or item["id"],
                role=role,
                permissions=PermissionMatrix.from_mapping(item.get("permissions")),
            )
        return actors

    def _persist(self, actors: dict[str, Actor]) -> None:
        raw = [
            {
                "id": a.id,
                "full_name": a.full_name,
                "role": a.role.value,
                "permissions": a.permissions.to_mapping(),
            }
            for a in actors.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


class ConfiguredActorProvider(ActorProvider):
    """Current actor = the configured actor id, looked up in the directory."""

    def __init__(self, actor_repo: ActorRepository, actor_id: str | None) -> None:
        self._actor_repo = actor_repo
        self._actor_id = actor_id

    def get_current_actor(self) -> Actor:
        if not self._actor_id:
            raise UnauthorizedError(
                "No actor configured (set BOXSTOCK_ACTOR or pass --actor)"
            )
        actor = self._actor_repo.get_by_id(self._actor_id)
        if actor is None:
            raise UnauthorizedError(f"Unknown actor '{self._actor_id}'")
        return actor
