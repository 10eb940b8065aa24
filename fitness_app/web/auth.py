from __future__ import annotations

import hashlib
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fastapi import Header

from fitness_app.core.errors import PermissionDeniedError
from fitness_app.core.session.models import Session
from fitness_app.core.timeutil import Clock


@dataclass(frozen=True)
class WebSession:
    session: Session
    remote_token: Optional[str]
    expires_at: float


class WebSessionRegistry:
    """
    Bearer tokens handed out by /v1/auth/login, one per caller.

    Only SHA-256 hashes of the tokens are kept, in memory; a restart logs
    every web caller out.
    """

    def __init__(self, *, ttl_seconds: float, clock: Clock = time.time):
        self.ttl_seconds = float(ttl_seconds)
        self.clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, WebSession] = {}

    @staticmethod
    def _hash_token(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def issue(self, session: Session, remote_token: Optional[str] = None) -> str:
        token = secrets.token_urlsafe(32)
        entry = WebSession(session=session, remote_token=remote_token, expires_at=float(self.clock()) + self.ttl_seconds)
        with self._lock:
            self._sessions[self._hash_token(token)] = entry
        return token

    def get(self, token: str) -> Optional[WebSession]:
        if not token:
            return None
        h = self._hash_token(token)
        with self._lock:
            entry = self._sessions.get(h)
            if entry is None:
                return None
            if entry.expires_at <= float(self.clock()):
                del self._sessions[h]
                return None
            return entry

    def revoke(self, token: str) -> Optional[WebSession]:
        if not token:
            return None
        with self._lock:
            return self._sessions.pop(self._hash_token(token), None)


def bearer_token(authorization: str) -> str:
    scheme, _, value = (authorization or "").partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return value.strip()


def build_session_auth(registry: WebSessionRegistry, *, admin: bool = False) -> Callable[..., WebSession]:
    def dep(authorization: str = Header(default="")) -> WebSession:
        entry = registry.get(bearer_token(authorization))
        if entry is None:
            raise PermissionDeniedError("Sign in required.")
        if admin and not entry.session.is_admin:
            raise PermissionDeniedError("Admin required for this action.")
        return entry

    return dep
