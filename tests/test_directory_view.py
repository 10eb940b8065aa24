from __future__ import annotations

import pytest

from fitness_app.core.errors import ValidationError


def test_listing_hides_deleted_and_annotates_status(services):
    services.deletions.mark_deleted(7)
    services.suspensions.suspend(42)

    users = services.users.list_active_users()
    assert [u["id"] for u in users] == [1, 42]
    assert all(u["id"] == u["userId"] for u in users)
    assert {u["id"]: u["status"] for u in users} == {1: "active", 42: "suspended"}


def test_listing_status_follows_expiry(services, clock):
    services.suspensions.suspend(42)
    clock.advance(24 * 3600)
    statuses = {u["id"]: u["status"] for u in services.users.list_active_users()}
    assert statuses[42] == "active"


def test_listing_does_not_touch_remote_records(services, directory):
    services.deletions.mark_deleted(7)
    services.users.list_active_users()
    assert len(directory.users) == 3
    assert "status" not in directory.users[0]


def test_listing_keeps_records_without_identity(services, directory):
    directory.users.append({"fullName": "Mystery"})
    users = services.users.list_active_users()
    assert users[-1] == {"fullName": "Mystery", "status": "active"}


def test_profile_update_records_changed_fields(services, directory):
    out = services.profiles.update_profile(42, {"weight": 80, "fullName": "Sam M", "role": "admin", "password": "s3cret"})
    assert out["id"] == out["userId"] == 42
    assert directory.updates[0]["identity"] == 42

    events = services.ledger.query(42)
    by_type = {e.type: e.description for e in events}
    assert by_type["role_changed"] == "Role changed to admin"
    assert by_type["password_changed"] == "Password changed"
    assert by_type["profile_update"] == "Profile updated: fullName, weight"
    assert "s3cret" not in " ".join(by_type.values())


def test_profile_update_validation(services, directory):
    with pytest.raises(ValidationError):
        services.profiles.update_profile(42, {})
    with pytest.raises(ValidationError):
        services.profiles.update_profile(None, {"weight": 1})
    assert directory.updates == []


def test_profile_update_passes_none_through_to_clear_fields(services, directory):
    services.profiles.update_profile(42, {"nickname": None, "weight": 79})
    assert directory.updates[0]["patch"] == {"nickname": None, "weight": 79}
    assert services.ledger.query(42)[0].description == "Profile updated: nickname, weight"


def test_profile_update_refuses_to_clear_role_or_password(services, directory):
    with pytest.raises(ValidationError) as ei:
        services.profiles.update_profile(42, {"role": None, "password": None, "weight": 1})
    assert "password, role" in ei.value.user_message
    assert directory.updates == []
