from __future__ import annotations

import json
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from fitness_app.core.persistence.kv_store import KeyValueStore

M = TypeVar("M", bound=BaseModel)


class OverlayStore:
    """
    Typed access to the overlay collections kept in one key-value store.

    Keys:
    - suspended_users: SuspensionState
    - deleted_users:   list of identity keys
    - user_activities: list of ActivityEvent (most recent first)
    - session:         StoredCredentials
    - login_streak:    LoginStreak

    Collections are loaded and saved whole on every mutation. Blobs that fail to
    parse are logged and read as empty so a damaged store never blocks the user.
    """

    SUSPENSIONS_KEY = "suspended_users"
    DELETIONS_KEY = "deleted_users"
    ACTIVITIES_KEY = "user_activities"
    SESSION_KEY = "session"
    STREAK_KEY = "login_streak"

    def __init__(self, kv: KeyValueStore, *, logger: Any = None):
        self.kv = kv
        self.logger = logger or logging.getLogger("fitness_app.store")

    def load_json(self, key: str, default: Any = None) -> Any:
        try:
            raw = self.kv.get_item(key)
        except OSError as e:
            self.logger.warning("Could not read %s from overlay store: %s", key, e)
            return default
        if raw is None or raw == "":
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            self.logger.error("Error parsing %s from overlay store: %s", key, e)
            return default

    def save_json(self, key: str, value: Any) -> None:
        self.kv.set_item(key, json.dumps(value, ensure_ascii=False))

    def load_model(self, key: str, model_cls: Type[M]) -> M:
        raw = self.load_json(key, None)
        if raw is None:
            return model_cls()
        try:
            return model_cls.model_validate(raw)
        except ValidationError as e:
            self.logger.error("Stored %s has an unexpected shape; ignoring it (%s errors)", key, e.error_count())
            return model_cls()

    def load_optional_model(self, key: str, model_cls: Type[M]) -> Optional[M]:
        raw = self.load_json(key, None)
        if raw is None:
            return None
        try:
            return model_cls.model_validate(raw)
        except ValidationError as e:
            self.logger.error("Stored %s has an unexpected shape; ignoring it (%s errors)", key, e.error_count())
            return None

    def save_model(self, key: str, model: BaseModel) -> None:
        self.save_json(key, model.model_dump(mode="json"))

    def remove(self, key: str) -> None:
        self.kv.remove_item(key)
