# devicehub/repositories/subscriber_repo.py
from typing import Any

from devicehub.core import geo, validation
from devicehub.models.subscriber import Subscriber
from devicehub.repositories.base import EntityRepository


class SubscriberRepository(EntityRepository[Subscriber]):
    """
    Data access layer for Subscriber.

    Rules:
      - name, address, phone_number required; phone_number is unique
      - plan_type defaults to "basic" when omitted
      - geo_location accepts {lat, lng} or {latitude, longitude};
        on update an explicit None (or an unusable point) clears it
    """

    model = Subscriber

    def get_by_phone_number(self, phone_number: str) -> Subscriber | None:
        return self._get_by(Subscriber.phone_number, phone_number)

    def create(self, fields: dict[str, Any]) -> Subscriber:
        subscriber = Subscriber(
            name=validation.subscriber_name(fields.get("name")),
            address=validation.address(fields.get("address")),
            phone_number=validation.phone_number(fields.get("phone_number")),
            plan_type=validation.plan_type(fields.get("plan_type")),
            geo_location=geo.encode_point(fields.get("geo_location")),
        )
        return self._insert(subscriber)

    def update_by_id(self, subscriber_id: Any, fields: dict[str, Any]) -> int:
        values: dict[str, Any] = {}
        if "name" in fields:
            values["name"] = validation.subscriber_name(fields["name"])
        if "plan_type" in fields:
            values["plan_type"] = validation.plan_type(fields["plan_type"])
        if "address" in fields:
            values["address"] = validation.address(fields["address"])
        if "phone_number" in fields:
            values["phone_number"] = validation.phone_number(fields["phone_number"])
        if "geo_location" in fields:
            values["geo_location"] = geo.encode_point(fields["geo_location"])
        return self._update(subscriber_id, values)
