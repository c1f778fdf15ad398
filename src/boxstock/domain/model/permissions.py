"""Actors and the explicit permission matrix.

Permissions are stored per actor as the nested ``{module: {action: bool}}``
mapping the user table has always used, but they are parsed once, at load
time, into a frozen set of ``(Module, Action)`` pairs. Unknown modules,
unknown actions and non-boolean flags are rejected there instead of being
silently treated as "no permission" at the call site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from boxstock.domain.exceptions import ValidationError


class Module(Enum):
    SUPPLIERS = "suppliers"
    MASTER_DATA = "masterData"
    RAW_MATERIALS = "rawMaterials"
    FINISHED_GOODS = "finishedGoods"
    CUSTOMERS = "customers"
    STOCK_LOGS = "stockLogs"
    WASTAGE_SALES = "wastageSales"


class Action(Enum):
    VIEW = "view"
    MANAGE = "manage"
    ADD = "add"
    MODIFY = "modify"
    DELETE = "delete"


class Role(Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class Permission:
    module: Module
    action: Action

    def __str__(self) -> str:
        return f"{self.module.value}:{self.action.value}"

    @staticmethod
    def parse(raw: str) -> Permission:
        """Parse ``'rawMaterials:add'``."""
        module_name, sep, action_name = raw.partition(":")
        if not sep:
            raise ValidationError(
                f"Invalid permission '{raw}'. Expected 'module:action'."
            )
        return Permission(_module(module_name.strip()), _action(action_name.strip()))


@dataclass(frozen=True)
class PermissionMatrix:
    """The granted ``(module, action)`` pairs of one actor.

    ``manage`` on a module implies every other action on that module.
    """

    granted: frozenset[Permission] = frozenset()

    def allows(self, module: Module, action: Action) -> bool:
        return (
            Permission(module, action) in self.granted
            or Permission(module, Action.MANAGE) in self.granted
        )

    def to_mapping(self) -> dict[str, dict[str, bool]]:
        result: dict[str, dict[str, bool]] = {}
        for perm in sorted(self.granted, key=str):
            result.setdefault(perm.module.value, {})[perm.action.value] = True
        return result

    @staticmethod
    def from_mapping(raw: Mapping[str, Mapping[str, bool]] | None) -> PermissionMatrix:
        """Build a matrix from the nested mapping form, validating every key."""
        if raw is None:
            return PermissionMatrix()
        if not isinstance(raw, Mapping):
            raise ValidationError(
                f"Permissions must be a mapping, got {type(raw).__name__}"
            )

        granted: set[Permission] = set()
        for module_name, actions in raw.items():
            module = _module(module_name)
            if not isinstance(actions, Mapping):
                raise ValidationError(
                    f"Permissions for '{module_name}' must be a mapping of action -> bool"
                )
            for action_name, flag in actions.items():
                action = _action(action_name)
                if not isinstance(flag, bool):
                    raise ValidationError(
                        f"Permission flag {module_name}.{action_name} must be true or false"
                    )
                if flag:
                    granted.add(Permission(module, action))
        return PermissionMatrix(frozenset(granted))

    @staticmethod
    def of(*permissions: str) -> PermissionMatrix:
        return PermissionMatrix(frozenset(Permission.parse(p) for p in permissions))


@dataclass
class Actor:
    """A user account as seen by the stock ledger."""

    id: str
    full_name: str
    role: Role = Role.USER
    permissions: PermissionMatrix = field(default_factory=PermissionMatrix)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def can(self, module: Module, action: Action) -> bool:
        # Admins have all permissions
        if self.is_admin:
            return True
        return self.permissions.allows(module, action)


def _module(name: str) -> Module:
    try:
        return Module(name)
    except ValueError:
        known = ", ".join(m.value for m in Module)
        raise ValidationError(f"Unknown module '{name}' (known: {known})") from None


def _action(name: str) -> Action:
    try:
        return Action(name)
    except ValueError:
        known = ", ".join(a.value for a in Action)
        raise ValidationError(f"Unknown action '{name}' (known: {known})") from None
