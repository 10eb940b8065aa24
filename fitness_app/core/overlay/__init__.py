from __future__ import annotations

from fitness_app.core.overlay.deletion import DeletionOverlay
from fitness_app.core.overlay.suspension import (
    SuspensionCheck,
    SuspensionOverlay,
    SuspensionRecord,
    SuspensionState,
    format_remaining,
    suspension_message,
)

__all__ = [
    "DeletionOverlay",
    "SuspensionCheck",
    "SuspensionOverlay",
    "SuspensionRecord",
    "SuspensionState",
    "format_remaining",
    "suspension_message",
]
