from __future__ import annotations

import logging
from typing import Any, Iterable, List

from fitness_app.core.activity import ActivityLedger, ActivityType
from fitness_app.core.identity import IdentityLike, identity_key
from fitness_app.core.persistence.overlay_store import OverlayStore


class DeletionOverlay:
    """
    Soft-delete markers. A marked user stays in the remote directory but is
    hidden from active listings. Markers never expire and there is no undelete.

    Store key:
    - deleted_users: list of identity keys
    """

    def __init__(self, store: OverlayStore, ledger: ActivityLedger, *, logger: Any = None):
        self.store = store
        self.ledger = ledger
        self.logger = logger or logging.getLogger("fitness_app.deletion")

    def _load(self) -> List[str]:
        raw = self.store.load_json(OverlayStore.DELETIONS_KEY, [])
        if not isinstance(raw, list):
            self.logger.error("Stored deleted users are not a list; ignoring them")
            return []
        out: List[str] = []
        for item in raw:
            key = identity_key(item) if isinstance(item, (int, str)) else None
            if key is not None and key not in out:
                out.append(key)
        return out

    def _save(self, keys: List[str]) -> None:
        self.store.save_json(OverlayStore.DELETIONS_KEY, keys)

    def deleted_identities(self) -> List[str]:
        return self._load()

    def is_deleted(self, identity: IdentityLike) -> bool:
        key = identity_key(identity)
        if key is None:
            return False
        return key in self._load()

    def mark_deleted(self, identity: IdentityLike) -> bool:
        """Returns True when the user was newly marked."""
        return bool(self.mark_deleted_bulk([identity]))

    def mark_deleted_bulk(self, identities: Iterable[IdentityLike]) -> List[str]:
        """Marks every resolvable user; returns the keys that were not already marked."""
        keys = self._load()
        added: List[str] = []
        for ident in identities:
            key = identity_key(ident)
            if key is None or key in keys:
                continue
            keys.append(key)
            added.append(key)
        if not added:
            return []
        self._save(keys)
        for key in added:
            self.ledger.append(key, ActivityType.ACCOUNT_DELETED, "Account marked deleted")
        self.logger.info("Marked %d user(s) deleted", len(added))
        return added
