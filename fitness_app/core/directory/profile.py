from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from fitness_app.core.activity import ActivityLedger, ActivityType
from fitness_app.core.errors import ValidationError
from fitness_app.core.identity import IdentityLike, normalize_identity, resolve_identity
from fitness_app.core.remote.client import DirectoryClient


class ProfileService:
    """Pushes profile edits to the remote directory and records what changed."""

    def __init__(self, *, directory: DirectoryClient, ledger: ActivityLedger, logger: Any = None):
        self.directory = directory
        self.ledger = ledger
        self.logger = logger or logging.getLogger("fitness_app.profile")

    def update_profile(self, identity: IdentityLike, patch: Mapping[str, Any]) -> Dict[str, Any]:
        ident = resolve_identity(identity)
        if ident is None:
            raise ValidationError("A user is required.")
        changes = dict(patch or {})
        if not changes:
            raise ValidationError("Nothing to update.")
        # None clears a field remotely; role and password cannot be cleared
        uncleared = sorted(k for k in ("role", "password") if k in changes and changes[k] is None)
        if uncleared:
            raise ValidationError(f"Cannot clear: {', '.join(uncleared)}.", fields=uncleared)

        updated = self.directory.update_identity(ident.value, changes)

        if "role" in changes:
            self.ledger.append(ident, ActivityType.ROLE_CHANGED, f"Role changed to {changes['role']}")
        if "password" in changes:
            self.ledger.append(ident, ActivityType.PASSWORD_CHANGED, "Password changed")
        # field names only; values may be personal
        other = sorted(k for k in changes if k not in {"role", "password"})
        if other:
            self.ledger.append(ident, ActivityType.PROFILE_UPDATE, f"Profile updated: {', '.join(other)}")

        self.logger.info("Profile for user %s updated (%d field(s))", ident.key, len(changes))
        return normalize_identity(updated or {})
