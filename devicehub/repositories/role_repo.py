# devicehub/repositories/role_repo.py
from typing import Any

from devicehub.core import validation
from devicehub.models.role import Role
from devicehub.repositories.base import EntityRepository


class RoleRepository(EntityRepository[Role]):
    """Data access layer for Role. role_name is unique."""

    model = Role

    def get_by_name(self, role_name: str) -> Role | None:
        return self._get_by(Role.role_name, role_name)

    def create(self, fields: dict[str, Any]) -> Role:
        role = Role(role_name=validation.role_name(fields.get("role_name")))
        return self._insert(role)

    def update_by_id(self, role_id: Any, fields: dict[str, Any]) -> int:
        values = {}
        if "role_name" in fields:
            values["role_name"] = validation.role_name(fields["role_name"])
        return self._update(role_id, values)
