from __future__ import annotations

import pytest

from fitness_app.core.config.models import AppConfig
from fitness_app.core.persistence import MemoryKeyValueStore
from fitness_app.core.services import build_services

from .helpers.fakes import FakeClock, FakeDirectory


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def directory():
    d = FakeDirectory(
        users=[
            {"userId": 1, "fullName": "Ada Admin", "email": "ada@example.com", "role": "admin"},
            {"userId": 42, "fullName": "Sam Member", "email": "sam@example.com", "role": "user"},
            {"userId": 7, "fullName": "Lee Lifter", "email": "lee@example.com", "role": "user"},
        ]
    )
    d.add_account("ada@example.com", "pw-admin", {"id": "1", "fullName": "Ada Admin", "email": "ada@example.com", "role": "admin"}, token="tok-admin")
    d.add_account("sam@example.com", "pw-sam", {"userId": 42, "fullName": "Sam Member", "email": "sam@example.com", "role": "user"}, token="tok-sam")
    return d


@pytest.fixture
def services(kv, directory, clock):
    return build_services(AppConfig(), kv=kv, directory=directory, clock=clock.time)
