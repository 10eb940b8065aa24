from __future__ import annotations

from fitness_app.core.session.guard import SessionGuard
from fitness_app.core.session.models import LoginStreak, Session, StoredCredentials
from fitness_app.core.session.streak import next_streak

__all__ = ["LoginStreak", "Session", "SessionGuard", "StoredCredentials", "next_streak"]
