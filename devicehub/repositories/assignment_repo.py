# devicehub/repositories/assignment_repo.py
import logging
from typing import Any

from sqlalchemy import delete
from sqlmodel import select

from devicehub.core import validation
from devicehub.core.errors import DuplicateError
from devicehub.models.assignment import Assignment
from devicehub.repositories.base import EntityLookup, Repository, ensure_exists

logger = logging.getLogger(__name__)


class AssignmentRepository(Repository[Assignment]):
    """
    Data access layer for user <-> device assignments.

    The primary key is the (user_id, device_id) pair:
      - both ids must reference existing rows before insert
      - assigning the same device to the same user twice -> DuplicateError
      - there is no update; an assignment is created or deleted
    """

    model = Assignment

    def __init__(self, session, users: EntityLookup, devices: EntityLookup):
        super().__init__(session)
        self.users = users
        self.devices = devices

    def exists(self, user_id: Any, device_id: Any) -> bool:
        uid = validation.positive_int(user_id, "user_id")
        did = validation.positive_int(device_id, "device_id")
        if not (validation.in_id_range(uid) and validation.in_id_range(did)):
            return False
        stmt = select(Assignment.user_id).where(
            Assignment.user_id == uid, Assignment.device_id == did
        ).limit(1)
        return self.session.exec(stmt).first() is not None

    def create(self, fields: dict[str, Any]) -> Assignment:
        uid = validation.positive_int(fields.get("user_id"), "user_id")
        did = validation.positive_int(fields.get("device_id"), "device_id")
        assigned_at = validation.timestamp(fields.get("assigned_at"), "assigned_at")

        ensure_exists(self.users, uid, "user_id", "user")
        ensure_exists(self.devices, did, "device_id", "device")

        # Reported before insert; the composite key still catches concurrent inserts.
        if self.exists(uid, did):
            raise DuplicateError("device already assigned to this user")

        assignment = Assignment(user_id=uid, device_id=did)
        if assigned_at is not None:
            assignment.assigned_at = assigned_at
        return self._insert(assignment)

    def find_by_user(self, user_id: Any) -> list[dict[str, Any]]:
        """Devices assigned to a user, oldest assignment first."""
        uid = validation.positive_int(user_id, "user_id")
        if not validation.in_id_range(uid):
            return []
        stmt = (
            select(Assignment.device_id, Assignment.assigned_at)
            .where(Assignment.user_id == uid)
            .order_by(Assignment.assigned_at, Assignment.device_id)
        )
        return [
            {"device_id": device_id, "assigned_at": assigned_at}
            for device_id, assigned_at in self.session.exec(stmt).all()
        ]

    def find_by_device(self, device_id: Any) -> list[dict[str, Any]]:
        """Users a device is assigned to, oldest assignment first."""
        did = validation.positive_int(device_id, "device_id")
        if not validation.in_id_range(did):
            return []
        stmt = (
            select(Assignment.user_id, Assignment.assigned_at)
            .where(Assignment.device_id == did)
            .order_by(Assignment.assigned_at, Assignment.user_id)
        )
        return [
            {"user_id": user_id, "assigned_at": assigned_at}
            for user_id, assigned_at in self.session.exec(stmt).all()
        ]

    def list(self, limit: Any = validation.DEFAULT_LIMIT, offset: Any = 0) -> list[Assignment]:
        """Paginated listing ordered by the (user_id, device_id) key."""
        stmt = (
            select(Assignment)
            .order_by(Assignment.user_id, Assignment.device_id)
            .offset(validation.clamp_offset(offset))
            .limit(validation.clamp_limit(limit))
        )
        return list(self.session.exec(stmt).all())

    def delete(self, user_id: Any, device_id: Any) -> int:
        """Remove one assignment; returns affected rows (0 means not found)."""
        uid = validation.positive_int(user_id, "user_id")
        did = validation.positive_int(device_id, "device_id")
        if not (validation.in_id_range(uid) and validation.in_id_range(did)):
            return 0
        affected = self._execute_write(
            delete(Assignment).where(
                Assignment.user_id == uid, Assignment.device_id == did
            )
        )
        logger.info("Deleted assignment user_id=%s device_id=%s affected=%d", uid, did, affected)
        return affected
