from __future__ import annotations

"""
SessionGuard: login, restore and logout, gated by the suspension overlay.

A suspended user is refused even when the remote directory accepted the
password; the overlay's verdict wins.
"""

import logging
import time
from typing import Any, Optional, Tuple, Union

from fitness_app.core.activity import ActivityLedger, ActivityType
from fitness_app.core.errors import AccountSuspendedError, ValidationError
from fitness_app.core.identity import normalize_identity, resolve_identity
from fitness_app.core.overlay.suspension import SUSPENDED_MESSAGE, SuspensionOverlay
from fitness_app.core.persistence.overlay_store import OverlayStore
from fitness_app.core.remote.client import DirectoryClient
from fitness_app.core.remote.models import AuthResult
from fitness_app.core.session.models import ANONYMOUS, LoginStreak, Session, StoredCredentials
from fitness_app.core.session.streak import next_streak
from fitness_app.core.timeutil import Clock, utc_date


class SessionGuard:
    def __init__(
        self,
        *,
        store: OverlayStore,
        suspensions: SuspensionOverlay,
        ledger: ActivityLedger,
        directory: DirectoryClient,
        clock: Clock = time.time,
        logger: Any = None,
    ):
        self.store = store
        self.suspensions = suspensions
        self.ledger = ledger
        self.directory = directory
        self.clock = clock
        self.logger = logger or logging.getLogger("fitness_app.session")
        self._session: Session = ANONYMOUS
        self.notice: Optional[str] = None

    @property
    def session(self) -> Session:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session.authenticated

    @property
    def is_admin(self) -> bool:
        return self._session.is_admin

    def restore_session(self) -> Session:
        """
        Rebuild the session from stored credentials at process start.

        A suspended user's credentials are discarded and the reason is left in
        `notice` for the caller to show.
        """
        self.notice = None
        creds = self.store.load_optional_model(OverlayStore.SESSION_KEY, StoredCredentials)
        if creds is None:
            self._session = ANONYMOUS
            return self._session

        if creds.identity is not None:
            check = self.suspensions.check_suspension(creds.identity)
            if check.is_suspended:
                self.store.remove(OverlayStore.SESSION_KEY)
                self._session = ANONYMOUS
                self.notice = check.message or SUSPENDED_MESSAGE
                self.logger.warning("Stored session for user %s discarded: account suspended", creds.identity)
                return self._session

        self._session = Session(identity=creds.identity, display_name=creds.display_name, role=creds.role, authenticated=True)
        if creds.token:
            self._set_directory_token(creds.token)
        return self._session

    def _set_directory_token(self, token: Optional[str]) -> None:
        set_token = getattr(self.directory, "set_token", None)
        if callable(set_token):
            set_token(token)

    def _authenticate(self, email: str, password: str) -> Tuple[Session, AuthResult]:
        if not str(email or "").strip() or not password:
            raise ValidationError("Email and password are required.")

        # authenticate() replaces the client's token; restored below if the overlay refuses the user
        previous_token = getattr(self.directory, "token", None)
        result = self.directory.authenticate(email, password)
        ident = resolve_identity(normalize_identity(result.user))

        if ident is not None:
            check = self.suspensions.check_suspension(ident)
            if check.is_suspended:
                self.logger.warning("Login refused for user %s: account suspended", ident.key)
                self._set_directory_token(previous_token)
                raise AccountSuspendedError(check.message or SUSPENDED_MESSAGE, identity=ident.key)

        key = ident.key if ident is not None else None
        session = Session(identity=key, display_name=result.display_name, role=result.role, authenticated=True)
        return session, result

    def _record_login(self, session: Session) -> None:
        if session.identity is not None:
            self.ledger.append(session.identity, ActivityType.LOGIN, f"{session.display_name or 'User'} logged in")
        self._update_streak()
        self.logger.info("User %s logged in", session.identity or "<unknown>")

    def login(self, email: str, password: str) -> Session:
        """
        Authenticate against the remote directory, then apply the overlay.

        Raises AuthenticationError (from the directory) on bad credentials and
        AccountSuspendedError when the user is locked out locally.
        """
        self.notice = None
        session, result = self._authenticate(email, password)
        creds = StoredCredentials(
            identity=session.identity,
            display_name=result.display_name,
            email=result.email,
            role=result.role,
            token=result.session_token,
        )
        self.store.save_model(OverlayStore.SESSION_KEY, creds)
        self._set_directory_token(result.session_token)
        self._session = session
        self._record_login(session)
        return self._session

    def issue_session(self, email: str, password: str) -> Tuple[Session, Optional[str]]:
        """
        Same checks and bookkeeping as login(), for a caller other than this process.

        The process session, the stored credentials and the directory's token are
        left as they were. Returns the caller's session and their remote token.
        """
        previous_token = getattr(self.directory, "token", None)
        try:
            session, result = self._authenticate(email, password)
        finally:
            self._set_directory_token(previous_token)
        self._record_login(session)
        return session, result.session_token

    def end_session(self, session: Session) -> None:
        """Record the logout of a session issued by issue_session()."""
        if session.authenticated and session.identity is not None:
            self.ledger.append(session.identity, ActivityType.LOGOUT, f"{session.display_name or 'User'} logged out")
        self.logger.info("User %s logged out", session.identity or "<anonymous>")

    def logout(self) -> None:
        s = self._session
        self.end_session(s)
        self.store.remove(OverlayStore.SESSION_KEY)
        self._set_directory_token(None)
        self._session = ANONYMOUS

    def track_activity(self, type: Union[ActivityType, str], description: str) -> None:
        if not self._session.authenticated or resolve_identity(self._session.identity) is None:
            return
        self.ledger.append(self._session.identity, type, description)

    def login_streak(self) -> LoginStreak:
        return self.store.load_model(OverlayStore.STREAK_KEY, LoginStreak)

    def _update_streak(self) -> LoginStreak:
        updated = next_streak(self.login_streak(), utc_date(self.clock()))
        self.store.save_model(OverlayStore.STREAK_KEY, updated)
        return updated
