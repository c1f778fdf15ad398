"""Tests for actor management."""

import pytest

from boxstock.application.manage_actors import ManageActorsHandler
from boxstock.domain.exceptions import UnauthorizedError, ValidationError
from boxstock.domain.model.permissions import Action, Module, Role
from tests.fakes import FakeActorRepository


class TestBootstrapAdmin:

    def test_first_admin_needs_no_requester(self):
        repo = FakeActorRepository()
        dto = ManageActorsHandler(repo).add(None, "owner", "Owner", role=Role.ADMIN)
        assert dto.role == "admin"
        assert repo.get_by_id("owner").is_admin

    def test_first_actor_must_be_admin(self):
        with pytest.raises(ValidationError, match="first actor must be an admin"):
            ManageActorsHandler(FakeActorRepository()).add(None, "u1", "User")


class TestAddActor:

    def _handler(self):
        repo = FakeActorRepository()
        handler = ManageActorsHandler(repo)
        handler.add(None, "owner", "Owner", role=Role.ADMIN)
        return repo, handler

    def test_admin_adds_user_with_permissions(self):
        repo, handler = self._handler()

        dto = handler.add("owner", " ravi ", "Ravi", permissions=["rawMaterials:add", "stockLogs:view"])

        assert dto.id == "ravi"
        assert dto.permissions == ["rawMaterials:add", "stockLogs:view"]
        assert repo.get_by_id("ravi").can(Module.RAW_MATERIALS, Action.ADD)

    def test_non_admin_rejected(self):
        _, handler = self._handler()
        handler.add("owner", "ravi", "Ravi")
        with pytest.raises(UnauthorizedError, match="Only an admin"):
            handler.add("ravi", "mallory", "Mallory", role=Role.ADMIN)

    def test_missing_requester_rejected_once_admin_exists(self):
        _, handler = self._handler()
        with pytest.raises(UnauthorizedError):
            handler.add(None, "ravi", "Ravi")

    def test_bad_permission_rejected(self):
        _, handler = self._handler()
        with pytest.raises(ValidationError, match="Unknown module"):
            handler.add("owner", "ravi", "Ravi", permissions=["rawMaterial:add"])

    def test_blank_name_falls_back_to_id(self):
        _, handler = self._handler()
        assert handler.add("owner", "ravi", "  ").full_name == "ravi"

    def test_list_sorted(self):
        _, handler = self._handler()
        handler.add("owner", "zed", "Zed")
        handler.add("owner", "amy", "Amy")
        assert [a.id for a in handler.list_actors()] == ["amy", "owner", "zed"]
