# devicehub/repositories/device_repo.py
from typing import Any

from sqlmodel import select

from devicehub.core import validation
from devicehub.models.device import Device
from devicehub.repositories.base import EntityLookup, EntityRepository, ensure_exists


class DeviceRepository(EntityRepository[Device]):
    """
    Data access layer for Device.

    Rules:
      - mac_id required (not unique; lookups return the lowest id)
      - subscriber_id must reference an existing subscriber
    """

    model = Device

    def __init__(self, session, subscribers: EntityLookup):
        super().__init__(session)
        self.subscribers = subscribers

    def get_by_mac_id(self, mac_id: str) -> Device | None:
        if not mac_id:
            return None
        stmt = select(Device).where(Device.mac_id == mac_id).order_by(Device.id).limit(1)
        return self.session.exec(stmt).first()

    def create(self, fields: dict[str, Any]) -> Device:
        subscriber_id = validation.positive_int(fields.get("subscriber_id"), "subscriber_id")
        mac_id = validation.mac_id(fields.get("mac_id"))
        model_name = validation.model_name(fields.get("model_name"))

        ensure_exists(self.subscribers, subscriber_id, "subscriber_id", "subscriber")

        device = Device(subscriber_id=subscriber_id, mac_id=mac_id, model_name=model_name)
        return self._insert(device)

    def update_by_id(self, device_id: Any, fields: dict[str, Any]) -> int:
        values: dict[str, Any] = {}
        if "mac_id" in fields:
            values["mac_id"] = validation.mac_id(fields["mac_id"])
        if "model_name" in fields:
            values["model_name"] = validation.model_name(fields["model_name"])
        if "subscriber_id" in fields:
            subscriber_id = validation.positive_int(fields["subscriber_id"], "subscriber_id")
            ensure_exists(self.subscribers, subscriber_id, "subscriber_id", "subscriber")
            values["subscriber_id"] = subscriber_id
        return self._update(device_id, values)
