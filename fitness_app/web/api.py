from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fitness_app.core.directory import DirectoryView, ProfileService
from fitness_app.core.errors import FitnessAppError, ValidationError
from fitness_app.core.identity import identity_key
from fitness_app.core.remote.client import DirectoryClient
from fitness_app.core.services import OverlayServices
from fitness_app.core.session.models import ANONYMOUS, Session
from fitness_app.core.timeutil import HOUR_SECONDS, Clock
from fitness_app.web.auth import WebSession, WebSessionRegistry, bearer_token, build_session_auth
from fitness_app.web.models import (
    ActivityItem,
    ActivityResponse,
    BulkDeleteRequest,
    DeleteResponse,
    LoginRequest,
    ProfilePatch,
    SessionResponse,
    SuspendRequest,
    SuspensionResponse,
)

STATUS_BY_CODE = {
    "invalid_credentials": 401,
    "account_suspended": 403,
    "permission_denied": 403,
    "validation_error": 400,
    "remote_error": 502,
    "config_error": 500,
}

DEFAULT_SESSION_TTL_SECONDS = 12 * HOUR_SECONDS


def create_app(
    services: OverlayServices,
    logger: Any = None,
    *,
    session_ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
    clock: Clock = time.time,
) -> FastAPI:
    """
    Auth and admin routes over the overlay.

    Every caller gets their own bearer token from /v1/auth/login; admin routes
    check that token, never the process-wide SessionGuard session.
    Store-touching routes are plain `def` so they run in the threadpool.
    """
    app = FastAPI(title="Fitness Overlay", version="0.1.0")
    log = logger or logging.getLogger("fitness_app.web")
    guard = services.guard
    sessions = WebSessionRegistry(ttl_seconds=session_ttl_seconds, clock=clock)
    require_admin = build_session_auth(sessions, admin=True)

    def _key(user_id: str) -> str:
        key = identity_key(user_id)
        if key is None:
            raise ValidationError("A user id is required.")
        return key

    def _directory_for(caller: WebSession) -> DirectoryClient:
        with_token = getattr(services.directory, "with_token", None)
        if callable(with_token):
            return with_token(caller.remote_token)
        return services.directory

    def _session_response(s: Session, token: Optional[str] = None) -> SessionResponse:
        return SessionResponse(
            identity=s.identity,
            display_name=s.display_name,
            role=s.role,
            authenticated=s.authenticated,
            streak=guard.login_streak().streak if s.authenticated else 0,
            token=token,
        )

    @app.exception_handler(FitnessAppError)
    async def app_error_handler(request: Request, exc: FitnessAppError):
        code = STATUS_BY_CODE.get(exc.code, 500)
        if code >= 500:
            log.error("%s %s failed: %s", request.method, request.url.path, exc.to_dict())
        return JSONResponse(status_code=code, content={"detail": exc.user_message, "code": exc.code})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": "Invalid request.", "code": "validation_error"})

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    # ---- session ----
    @app.post("/v1/auth/login", response_model=SessionResponse)
    def login(req: LoginRequest):
        s, remote_token = guard.issue_session(req.email, req.password)
        return _session_response(s, sessions.issue(s, remote_token))

    @app.post("/v1/auth/logout", response_model=SessionResponse)
    def logout(authorization: str = Header(default="")):
        caller = sessions.revoke(bearer_token(authorization))
        if caller is not None:
            guard.end_session(caller.session)
        return _session_response(ANONYMOUS)

    @app.get("/v1/auth/session", response_model=SessionResponse)
    def session(authorization: str = Header(default="")):
        caller = sessions.get(bearer_token(authorization))
        return _session_response(caller.session if caller is not None else ANONYMOUS)

    # ---- admin ----
    @app.get("/v1/admin/users")
    def list_users(caller: WebSession = Depends(require_admin)) -> List[Dict[str, Any]]:
        view = DirectoryView(directory=_directory_for(caller), deletions=services.deletions, suspensions=services.suspensions, logger=log)
        return view.list_active_users()

    @app.put("/v1/admin/users/{user_id}")
    def update_user(user_id: str, req: ProfilePatch, caller: WebSession = Depends(require_admin)) -> Dict[str, Any]:
        profiles = ProfileService(directory=_directory_for(caller), ledger=services.ledger, logger=log)
        return profiles.update_profile(_key(user_id), req.fields)

    @app.get("/v1/admin/users/{user_id}/suspension", response_model=SuspensionResponse)
    def get_suspension(user_id: str, caller: WebSession = Depends(require_admin)):
        key = _key(user_id)
        check = services.suspensions.check_suspension(key)
        return SuspensionResponse(identity=key, is_suspended=check.is_suspended, message=check.message)

    @app.post("/v1/admin/users/{user_id}/suspend", response_model=SuspensionResponse)
    def suspend_user(user_id: str, req: SuspendRequest, caller: WebSession = Depends(require_admin)):
        key = _key(user_id)
        services.suspensions.suspend(key, req.reason)
        check = services.suspensions.check_suspension(key)
        log.info("Admin %s suspended user %s", caller.session.identity, key)
        return SuspensionResponse(identity=key, is_suspended=check.is_suspended, message=check.message)

    @app.delete("/v1/admin/users/{user_id}/suspend", response_model=SuspensionResponse)
    def end_suspension(user_id: str, caller: WebSession = Depends(require_admin)):
        key = _key(user_id)
        services.suspensions.end_suspension(key)
        return SuspensionResponse(identity=key, is_suspended=False)

    @app.post("/v1/admin/users/{user_id}/delete", response_model=DeleteResponse)
    def delete_user(user_id: str, caller: WebSession = Depends(require_admin)):
        key = _key(user_id)
        services.deletions.mark_deleted(key)
        log.info("Admin %s marked user %s deleted", caller.session.identity, key)
        return DeleteResponse(deleted=[key])

    @app.post("/v1/admin/users/delete", response_model=DeleteResponse)
    def delete_users(req: BulkDeleteRequest, caller: WebSession = Depends(require_admin)):
        return DeleteResponse(deleted=services.deletions.mark_deleted_bulk(req.identities))

    @app.get("/v1/admin/users/{user_id}/activity", response_model=ActivityResponse)
    def user_activity(user_id: str, caller: WebSession = Depends(require_admin)):
        key = _key(user_id)
        events = [ActivityItem(**e.model_dump()) for e in services.ledger.query(key)]
        return ActivityResponse(identity=key, events=events)

    return app
