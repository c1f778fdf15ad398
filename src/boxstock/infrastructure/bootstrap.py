"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.engine import Engine

from boxstock.domain.clock import SystemClock
from boxstock.domain.repository.unit_of_work import UnitOfWorkFactory
from boxstock.domain.service.access_policy import AccessPolicyGate
from boxstock.domain.service.stock_mutation_service import StockMutationService
from boxstock.domain.service.wastage_sale_service import WastageSaleService
from boxstock.infrastructure.config import Settings
from boxstock.infrastructure.persistence.json_actor_repository import (
    ConfiguredActorProvider,
    JsonActorRepository,
)
from boxstock.infrastructure.persistence.sql_engine import (
    build_engine,
    build_session_factory,
)
from boxstock.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@lru_cache(maxsize=None)
def _engine(database_url: str, echo: bool) -> Engine:
    return build_engine(database_url, echo=echo)


def uow_factory(settings: Settings) -> UnitOfWorkFactory:
    session_factory = build_session_factory(
        _engine(settings.resolved_database_url, settings.sql_echo)
    )
    clock = SystemClock()
    return lambda: SqlUnitOfWork(session_factory, clock)


def actor_repository(settings: Settings) -> JsonActorRepository:
    return JsonActorRepository(settings.actors_file)


def actor_provider(settings: Settings) -> ConfiguredActorProvider:
    return ConfiguredActorProvider(actor_repository(settings), settings.actor_id)


def access_gate(settings: Settings) -> AccessPolicyGate:
    return AccessPolicyGate(actor_repository(settings))


def stock_mutation_service(settings: Settings) -> StockMutationService:
    return StockMutationService(uow_factory(settings), access_gate(settings))


def wastage_sale_service(settings: Settings) -> WastageSaleService:
    return WastageSaleService(uow_factory(settings), access_gate(settings))
