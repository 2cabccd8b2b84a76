"""Entity repositories: validation, FK existence, uniqueness, pagination."""

import pytest
from sqlmodel import Session

from devicehub.core.errors import (
    DuplicateError,
    NoFieldsProvidedError,
    ReferenceMissingError,
    StorageFailureError,
    ValidationError,
)
from conftest import build_repos


# ----- Subscribers -----


def test_subscriber_create_then_find_matches_input(repos, session):
    created = repos.subscribers.create(
        {
            "name": "Acme",
            "plan_type": "premium",
            "address": "1 Main St",
            "phone_number": "555-0101",
            "geo_location": {"lat": 40.7128, "lng": -74.006},
        }
    )
    session.expunge_all()

    found = repos.subscribers.get_by_id(created.id)
    assert found is not None
    assert found.name == "Acme"
    assert found.plan_type == "premium"
    assert found.address == "1 Main St"
    assert found.phone_number == "555-0101"
    assert found.geo_location == "POINT(-74.006 40.7128)"
    assert found.geo_point == {"lat": 40.7128, "lng": -74.006}
    assert found.created_at is not None


def test_subscriber_plan_defaults_to_basic_and_geo_is_optional(subscriber):
    assert subscriber.plan_type == "basic"
    assert subscriber.geo_location is None
    assert subscriber.geo_point is None


def test_subscriber_duplicate_phone(repos, subscriber):
    with pytest.raises(DuplicateError):
        repos.subscribers.create({"name": "Other", "address": "Elsewhere", "phone_number": "8001"})


def test_subscriber_update_to_taken_phone_is_duplicate(repos, subscriber):
    other = repos.subscribers.create({"name": "Other", "address": "A", "phone_number": "8002"})
    with pytest.raises(DuplicateError):
        repos.subscribers.update_by_id(other.id, {"phone_number": "8001"})
    # session is usable after the rollback
    assert repos.subscribers.get_by_id(other.id).phone_number == "8002"


def test_subscriber_invalid_fields(repos):
    with pytest.raises(ValidationError) as exc:
        repos.subscribers.create({"name": "X", "address": "A", "phone_number": "abc"})
    assert exc.value.field == "phone_number"
    with pytest.raises(ValidationError) as exc:
        repos.subscribers.create(
            {"name": "X", "address": "A", "phone_number": "1", "plan_type": "gold"}
        )
    assert exc.value.field == "plan_type"


def test_subscriber_update_sets_and_clears_geo(repos, subscriber):
    repos.subscribers.update_by_id(subscriber.id, {"geo_location": {"latitude": 1.5, "longitude": 2.5}})
    assert repos.subscribers.get_by_id(subscriber.id).geo_point == {"lat": 1.5, "lng": 2.5}

    repos.subscribers.update_by_id(subscriber.id, {"geo_location": None})
    assert repos.subscribers.get_by_id(subscriber.id).geo_location is None


def test_subscriber_lookup_by_phone(repos, subscriber):
    assert repos.subscribers.get_by_phone_number("8001").id == subscriber.id
    assert repos.subscribers.get_by_phone_number("0000") is None
    assert repos.subscribers.get_by_phone_number("") is None


# ----- Common contract -----


def test_update_without_fields_fails(repos, subscriber):
    with pytest.raises(NoFieldsProvidedError):
        repos.subscribers.update_by_id(subscriber.id, {})
    with pytest.raises(NoFieldsProvidedError):
        repos.roles.update_by_id(1, {"unknown": "x"})


def test_missing_ids_are_not_errors(repos, subscriber):
    assert repos.subscribers.get_by_id(9999) is None
    assert repos.subscribers.get_by_id(0) is None
    assert repos.subscribers.update_by_id(9999, {"name": "Nobody"}) == 0
    assert repos.subscribers.delete_by_id(9999) == 0

    assert repos.subscribers.delete_by_id(subscriber.id) == 1
    assert repos.subscribers.get_by_id(subscriber.id) is None
    assert repos.subscribers.delete_by_id(subscriber.id) == 0


def test_ids_beyond_the_key_range_are_not_found(repos, subscriber, user, device):
    huge = 2**70
    assert repos.subscribers.get_by_id(huge) is None
    assert repos.subscribers.update_by_id(huge, {"name": "Nobody"}) == 0
    assert repos.subscribers.delete_by_id(huge) == 0
    assert repos.devices.get_by_id(huge) is None
    assert not repos.assignments.exists(huge, device.id)
    assert repos.assignments.find_by_user(huge) == []
    assert repos.assignments.find_by_device(huge) == []
    assert repos.assignments.delete(user.id, huge) == 0
    with pytest.raises(ReferenceMissingError):
        repos.assignments.create({"user_id": huge, "device_id": device.id})


def test_delete_of_referenced_row_is_restricted(repos, subscriber, device):
    with pytest.raises(StorageFailureError):
        repos.subscribers.delete_by_id(subscriber.id)
    assert repos.subscribers.get_by_id(subscriber.id) is not None
    assert repos.devices.get_by_id(device.id) is not None


def test_list_is_clamped_and_ordered_by_id(repos):
    for i in range(105):
        repos.roles.create({"role_name": f"role-{i:03d}"})

    page = repos.roles.list(limit=1000, offset=0)
    assert len(page) == 100
    ids = [r.id for r in page]
    assert ids == sorted(ids)
    assert ids == [r.id for r in repos.roles.list(limit=1000, offset=0)]

    assert len(repos.roles.list()) == 50
    tail = repos.roles.list(limit=10, offset=100)
    assert [r.role_name for r in tail] == [f"role-{i:03d}" for i in range(100, 105)]


def test_reset_removes_rows_and_tolerates_counter_reset_failure(repos):
    repos.roles.create({"role_name": "a"})
    repos.roles.create({"role_name": "b"})
    repos.roles.reset()
    assert repos.roles.list() == []
    assert repos.roles.create({"role_name": "c"}).id is not None


# ----- Roles -----


def test_role_duplicate_name_and_lookup(repos, role):
    with pytest.raises(DuplicateError):
        repos.roles.create({"role_name": "operator"})
    assert repos.roles.get_by_name("operator").id == role.id
    assert repos.roles.update_by_id(role.id, {"role_name": "admin"}) == 1
    assert repos.roles.get_by_name("admin").id == role.id


# ----- Users -----


def test_user_create_hashes_password(repos, credentials, user):
    assert user.password_hash and user.password_hash != "s3cret"
    assert credentials.verify_password("s3cret", user.password_hash)


def test_user_lookups(repos, user):
    assert repos.users.get_by_username("alice").id == user.id
    assert repos.users.get_by_email("alice@example.com").id == user.id
    assert repos.users.get_by_username("nobody") is None
    assert repos.users.get_by_email("nobody@example.com") is None


def test_user_without_password_is_allowed(repos, subscriber, role):
    created = repos.users.create(
        {"subscriber_id": subscriber.id, "role_id": role.id, "email": "b@x.io", "username": "b"}
    )
    assert created.password_hash is None


@pytest.mark.parametrize("field, value", [("email", "alice@example.com"), ("username", "alice")])
def test_user_unique_fields(repos, subscriber, role, user, field, value):
    fields = {
        "subscriber_id": subscriber.id,
        "role_id": role.id,
        "email": "carol@example.com",
        "username": "carol",
    }
    fields[field] = value
    with pytest.raises(DuplicateError):
        repos.users.create(fields)


def test_user_missing_references(repos, subscriber, role):
    base = {"email": "d@x.io", "username": "d"}
    with pytest.raises(ReferenceMissingError) as exc:
        repos.users.create({**base, "subscriber_id": 404, "role_id": role.id})
    assert exc.value.field == "subscriber_id"
    with pytest.raises(ReferenceMissingError) as exc:
        repos.users.create({**base, "subscriber_id": subscriber.id, "role_id": 404})
    assert exc.value.field == "role_id"


def test_user_update_checks_references(repos, user):
    with pytest.raises(ReferenceMissingError) as exc:
        repos.users.update_by_id(user.id, {"role_id": 404})
    assert exc.value.field == "role_id"


def test_user_update_password(repos, credentials, user):
    assert repos.users.update_by_id(user.id, {"password": "n3w"}) == 1
    updated = repos.users.get_by_id(user.id)
    assert credentials.verify_password("n3w", updated.password_hash)
    assert not credentials.verify_password("s3cret", updated.password_hash)


def test_user_update_with_null_password_keeps_hash(repos, user):
    before = user.password_hash
    with pytest.raises(ValidationError) as exc:
        repos.users.update_by_id(user.id, {"password": None})
    assert exc.value.field == "password"
    assert repos.users.get_by_id(user.id).password_hash == before

    assert repos.users.update_by_id(user.id, {"password_hash": None}) == 1
    assert repos.users.get_by_id(user.id).password_hash is None


# ----- Devices -----


def test_device_end_to_end(repos, subscriber):
    created = repos.devices.create(
        {"subscriber_id": subscriber.id, "mac_id": "mac-001", "model_name": "M1"}
    )
    assert created.id is not None

    found = repos.devices.get_by_mac_id("mac-001")
    assert found is not None
    assert found.model_name == "M1"

    assert repos.devices.update_by_id(created.id, {"model_name": "M2", "mac_id": "mac-002"}) == 1
    updated = repos.devices.get_by_id(created.id)
    assert updated.model_name == "M2"
    assert updated.mac_id == "mac-002"

    assert repos.devices.delete_by_id(created.id) == 1
    assert repos.devices.get_by_id(created.id) is None


def test_device_requires_existing_subscriber(repos):
    with pytest.raises(ReferenceMissingError) as exc:
        repos.devices.create({"subscriber_id": 12345, "mac_id": "mac-x"})
    assert exc.value.field == "subscriber_id"


def test_device_requires_mac(repos, subscriber):
    with pytest.raises(ValidationError) as exc:
        repos.devices.create({"subscriber_id": subscriber.id})
    assert exc.value.field == "mac_id"


def test_validation_runs_before_reference_checks(repos):
    with pytest.raises(ValidationError):
        repos.devices.create({"subscriber_id": 12345, "mac_id": ""})


# ----- Assignments -----


def test_assignment_create_and_queries(repos, user, device):
    created = repos.assignments.create({"user_id": user.id, "device_id": device.id})
    assert created.assigned_at is not None
    assert repos.assignments.exists(user.id, device.id)

    by_user = repos.assignments.find_by_user(user.id)
    assert [row["device_id"] for row in by_user] == [device.id]
    by_device = repos.assignments.find_by_device(device.id)
    assert [row["user_id"] for row in by_device] == [user.id]

    assert len(repos.assignments.list()) == 1


def test_assignment_duplicate_pair(repos, user, device):
    repos.assignments.create({"user_id": user.id, "device_id": device.id})
    with pytest.raises(DuplicateError):
        repos.assignments.create({"user_id": user.id, "device_id": device.id})


def test_assignment_duplicate_detected_by_composite_key(engine, credentials, user, device, monkeypatch):
    with Session(engine) as first:
        build_repos(first, credentials).assignments.create(
            {"user_id": user.id, "device_id": device.id}
        )
    with Session(engine) as second:
        assignments = build_repos(second, credentials).assignments
        monkeypatch.setattr(assignments, "exists", lambda *_: False)
        with pytest.raises(DuplicateError):
            assignments.create({"user_id": user.id, "device_id": device.id})


def test_assignment_missing_reference_names_the_field(repos, user, device):
    with pytest.raises(ReferenceMissingError) as exc:
        repos.assignments.create({"user_id": 999, "device_id": device.id})
    assert exc.value.field == "user_id"
    assert "user_id" in exc.value.message

    with pytest.raises(ReferenceMissingError) as exc:
        repos.assignments.create({"user_id": user.id, "device_id": 999})
    assert exc.value.field == "device_id"
    assert "device_id" in exc.value.message


def test_assignment_explicit_timestamp_and_ordering(repos, subscriber, user, device):
    second = repos.devices.create({"subscriber_id": subscriber.id, "mac_id": "mac-002"})
    repos.assignments.create(
        {"user_id": user.id, "device_id": second.id, "assigned_at": "2024-01-02T00:00:00"}
    )
    repos.assignments.create(
        {"user_id": user.id, "device_id": device.id, "assigned_at": "2024-01-01T00:00:00"}
    )
    assert [row["device_id"] for row in repos.assignments.find_by_user(user.id)] == [
        device.id,
        second.id,
    ]


def test_assignment_list_is_ordered_by_key(repos, subscriber, user, device):
    second = repos.devices.create({"subscriber_id": subscriber.id, "mac_id": "mac-002"})
    repos.assignments.create(
        {"user_id": user.id, "device_id": second.id, "assigned_at": "2024-01-01T00:00:00"}
    )
    repos.assignments.create(
        {"user_id": user.id, "device_id": device.id, "assigned_at": "2024-06-01T00:00:00+02:00"}
    )
    assert [(a.user_id, a.device_id) for a in repos.assignments.list()] == [
        (user.id, device.id),
        (user.id, second.id),
    ]


def test_assignment_delete(repos, user, device):
    repos.assignments.create({"user_id": user.id, "device_id": device.id})
    assert repos.assignments.delete(user.id, device.id) == 1
    assert not repos.assignments.exists(user.id, device.id)
    assert repos.assignments.delete(user.id, device.id) == 0
    assert repos.assignments.find_by_user(user.id) == []
