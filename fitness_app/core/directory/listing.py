from __future__ import annotations

import logging
from typing import Any, Dict, List

from fitness_app.core.identity import identity_key, normalize_identity
from fitness_app.core.overlay import DeletionOverlay, SuspensionOverlay
from fitness_app.core.remote.client import DirectoryClient

STATUS_ACTIVE = "active"
STATUS_SUSPENDED = "suspended"


class DirectoryView:
    """Remote user listing with soft-deleted users removed and a derived `status`."""

    def __init__(self, *, directory: DirectoryClient, deletions: DeletionOverlay, suspensions: SuspensionOverlay, logger: Any = None):
        self.directory = directory
        self.deletions = deletions
        self.suspensions = suspensions
        self.logger = logger or logging.getLogger("fitness_app.directory")

    def list_active_users(self) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        deleted = set(self.deletions.deleted_identities())
        for raw in self.directory.list_identities():
            if not isinstance(raw, dict):
                continue
            rec = normalize_identity(raw)
            key = identity_key(rec)
            if key is not None and key in deleted:
                continue
            suspended = key is not None and self.suspensions.is_suspended(key)
            rec["status"] = STATUS_SUSPENDED if suspended else STATUS_ACTIVE
            out.append(rec)
        return out
