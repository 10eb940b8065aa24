from __future__ import annotations

import logging
import time
import uuid
from typing import Any, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from fitness_app.core.activity.models import ActivityEvent, ActivityType
from fitness_app.core.errors import ValidationError
from fitness_app.core.identity import IdentityLike, identity_key
from fitness_app.core.persistence.overlay_store import OverlayStore
from fitness_app.core.timeutil import DAY_SECONDS, Clock, iso_from_ts, ts_from_iso


class ActivityLedger:
    """
    Rolling, per-user activity log kept in the overlay store.

    Events are stored most recent first. Retention is enforced on write only:
    every append drops events older than the window, reads never prune.
    """

    def __init__(self, store: OverlayStore, *, retention_seconds: float = DAY_SECONDS, clock: Clock = time.time, logger: Any = None):
        self.store = store
        self.retention_seconds = float(retention_seconds)
        self.clock = clock
        self.logger = logger or logging.getLogger("fitness_app.activity")

    def _load(self) -> List[ActivityEvent]:
        raw = self.store.load_json(OverlayStore.ACTIVITIES_KEY, [])
        if not isinstance(raw, list):
            self.logger.error("Stored activities are not a list; ignoring them")
            return []
        out: List[ActivityEvent] = []
        for item in raw:
            try:
                out.append(ActivityEvent.model_validate(item))
            except PydanticValidationError:
                continue
        return out

    def _save(self, events: List[ActivityEvent]) -> None:
        self.store.save_json(OverlayStore.ACTIVITIES_KEY, [e.model_dump(mode="json") for e in events])

    def _within_window(self, event: ActivityEvent, now: float) -> bool:
        ts = ts_from_iso(event.timestamp)
        if ts is None:
            return False
        return ts > now - self.retention_seconds

    def all_events(self) -> List[ActivityEvent]:
        return self._load()

    def append(self, identity: IdentityLike, type: Union[ActivityType, str], description: str = "") -> ActivityEvent:
        key = identity_key(identity)
        if key is None:
            raise ValidationError("Activity requires a user.", type=str(getattr(type, "value", type)))
        now = float(self.clock())
        event = ActivityEvent(
            id=uuid.uuid4().hex,
            identity=key,
            type=str(getattr(type, "value", type)),
            description=str(description or ""),
            timestamp=iso_from_ts(now),
        )
        events = [event, *self._load()]
        kept = [e for e in events if self._within_window(e, now)]
        self._save(kept)
        return event

    def query(self, identity: IdentityLike, *, strict: bool = False) -> List[ActivityEvent]:
        """
        Events for one user in stored order.

        Without `strict`, events past the window may still appear if nothing has
        been appended since they aged out.
        """
        key = identity_key(identity)
        if key is None:
            return []
        events = [e for e in self._load() if e.identity == key]
        if strict:
            now = float(self.clock())
            events = [e for e in events if self._within_window(e, now)]
        return events

    def latest(self, identity: IdentityLike) -> Optional[ActivityEvent]:
        events = self.query(identity)
        if not events:
            return None
        return max(events, key=lambda e: ts_from_iso(e.timestamp) or 0.0)
