from __future__ import annotations

from fitness_app.core.activity.ledger import ActivityLedger
from fitness_app.core.activity.models import ActivityEvent, ActivityType

__all__ = ["ActivityEvent", "ActivityLedger", "ActivityType"]
