"""Abstract repository for actors, plus the current-actor contract.

Defined in the domain layer so the domain never depends on
infrastructure. Login and session handling live outside this project;
all the ledger needs is "who is acting" and "what may they do".
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from boxstock.domain.model.permissions import Actor


class ActorRepository(ABC):

    @abstractmethod
    def get_by_id(self, actor_id: str) -> Actor | None:
        """Return an actor by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Actor]:
        """Return every known actor."""

    @abstractmethod
    def save(self, actor: Actor) -> None:
        """Persist a new or updated actor."""


class ActorProvider(ABC):

    @abstractmethod
    def get_current_actor(self) -> Actor:
        """Return the authenticated actor, or raise UnauthorizedError."""
