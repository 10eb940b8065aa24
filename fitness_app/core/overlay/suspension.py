from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from fitness_app.core.activity import ActivityLedger, ActivityType
from fitness_app.core.identity import IdentityLike, identity_key
from fitness_app.core.persistence.overlay_store import OverlayStore
from fitness_app.core.timeutil import DAY_SECONDS, HOUR_SECONDS, Clock

SUSPENDED_MESSAGE = "Your account is temporarily suspended."


class SuspensionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    identity: str
    expires_at: float
    reason: Optional[str] = None
    suspended_at: Optional[float] = None


class SuspensionState(BaseModel):
    records: Dict[str, SuspensionRecord] = Field(default_factory=dict)


class SuspensionCheck(BaseModel):
    is_suspended: bool
    message: Optional[str] = None


def format_remaining(seconds: float) -> str:
    """'23 hours and 59 minutes', or just '59 minutes' under an hour."""
    remaining = max(0, int(seconds))
    hours = remaining // HOUR_SECONDS
    minutes = (remaining % HOUR_SECONDS) // 60
    if hours:
        return f"{hours} hours and {minutes} minutes"
    return f"{minutes} minutes"


def suspension_message(remaining_seconds: float, reason: Optional[str] = None) -> str:
    msg = f"{SUSPENDED_MESSAGE} You can access your account again in {format_remaining(remaining_seconds)}."
    if reason:
        msg += f" Reason: {reason}"
    return msg


class SuspensionOverlay:
    """
    Time-limited lockouts layered over the remote user directory.

    Store key:
    - suspended_users: SuspensionState

    A record whose expires_at has passed is treated as absent; it is removed the
    next time anyone checks that user. There is no background sweep.
    """

    def __init__(
        self,
        store: OverlayStore,
        ledger: ActivityLedger,
        *,
        duration_seconds: float = DAY_SECONDS,
        clock: Clock = time.time,
        logger: Any = None,
    ):
        self.store = store
        self.ledger = ledger
        self.duration_seconds = float(duration_seconds)
        self.clock = clock
        self.logger = logger or logging.getLogger("fitness_app.suspension")

    def _load(self) -> SuspensionState:
        return self.store.load_model(OverlayStore.SUSPENSIONS_KEY, SuspensionState)

    def _save(self, st: SuspensionState) -> None:
        self.store.save_model(OverlayStore.SUSPENSIONS_KEY, st)

    def suspend(self, identity: IdentityLike, reason: Optional[str] = None) -> Optional[SuspensionRecord]:
        """Start (or restart) a lockout for the user. Returns None if no user could be resolved."""
        key = identity_key(identity)
        if key is None:
            return None
        now = float(self.clock())
        reason = (reason or "").strip() or None
        rec = SuspensionRecord(identity=key, expires_at=now + self.duration_seconds, reason=reason, suspended_at=now)
        st = self._load()
        st.records[key] = rec
        self._save(st)
        self.logger.info("User %s suspended until %.0f", key, rec.expires_at)

        description = f"Account suspended for {format_remaining(self.duration_seconds)}"
        if reason:
            description += f". Reason: {reason}"
        self.ledger.append(key, ActivityType.ACCOUNT_SUSPENDED, description)
        return rec

    def check_suspension(self, identity: IdentityLike) -> SuspensionCheck:
        key = identity_key(identity)
        if key is None:
            return SuspensionCheck(is_suspended=False)
        st = self._load()
        rec = st.records.get(key)
        if rec is None:
            return SuspensionCheck(is_suspended=False)
        now = float(self.clock())
        if rec.expires_at <= now:
            del st.records[key]
            self._save(st)
            self.logger.info("Suspension for user %s expired", key)
            return SuspensionCheck(is_suspended=False)
        return SuspensionCheck(is_suspended=True, message=suspension_message(rec.expires_at - now, rec.reason))

    def is_suspended(self, identity: IdentityLike) -> bool:
        return self.check_suspension(identity).is_suspended

    def end_suspension(self, identity: IdentityLike) -> None:
        key = identity_key(identity)
        if key is None:
            return
        st = self._load()
        if st.records.pop(key, None) is not None:
            self._save(st)
        self.logger.info("Suspension for user %s ended", key)
        self.ledger.append(key, ActivityType.ACCOUNT_REACTIVATED, "Account reactivated")

    def active_suspensions(self) -> Dict[str, SuspensionRecord]:
        """Live records only; expired ones found along the way are pruned."""
        st = self._load()
        now = float(self.clock())
        live = {k: r for k, r in st.records.items() if r.expires_at > now}
        if len(live) != len(st.records):
            self._save(SuspensionState(records=live))
        return live
