from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Union

import requests

from fitness_app.core.errors import AuthenticationError, RemoteServiceError
from fitness_app.core.remote.models import AuthResult

AUTH_FAILURE_STATUSES = {400, 401, 403}


class DirectoryClient(Protocol):
    """The remote user directory as the overlay sees it."""

    def authenticate(self, email: str, password: str) -> AuthResult: ...

    def list_identities(self) -> List[Dict[str, Any]]: ...

    def get_identity(self, identity: Union[int, str]) -> Dict[str, Any]: ...

    def update_identity(self, identity: Union[int, str], patch: Dict[str, Any]) -> Dict[str, Any]: ...


def _json_or_none(r: requests.Response) -> Any:
    ctype = r.headers.get("content-type") or ""
    if "application/json" not in ctype:
        return None
    try:
        return r.json()
    except ValueError:
        return None


class HttpDirectoryClient:
    """
    JSON-over-HTTP client for the fitness API.

    Failures surface as RemoteServiceError (or AuthenticationError on login);
    there is no retry here.
    """

    def __init__(self, base_url: str = "http://localhost:8000", *, timeout_seconds: float = 10.0, token: Optional[str] = None, logger: Any = None):
        self.base_url = base_url
        self.timeout_seconds = float(timeout_seconds)
        self.token = token
        self.logger = logger or logging.getLogger("fitness_app.remote")

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        try:
            r = requests.request(method, self._url(path), headers=self._headers(), json=body, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            self.logger.error("%s %s failed: %s", method, path, e)
            raise RemoteServiceError(path=path, error=str(e)) from e
        payload = _json_or_none(r)
        if not r.ok:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise RemoteServiceError(str(message or f"API error: {r.status_code}"), path=path, status=r.status_code)
        return payload

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    def with_token(self, token: Optional[str]) -> "HttpDirectoryClient":
        """A client for one caller; this client's own token is untouched."""
        return HttpDirectoryClient(self.base_url, timeout_seconds=self.timeout_seconds, token=token, logger=self.logger)

    def authenticate(self, email: str, password: str) -> AuthResult:
        try:
            payload = self._request("POST", "/api/auth/login", {"email": email, "password": password})
        except RemoteServiceError as e:
            if e.context.get("status") in AUTH_FAILURE_STATUSES:
                raise AuthenticationError(email=email) from e
            raise
        if not isinstance(payload, dict):
            raise RemoteServiceError("Unexpected login response.", path="/api/auth/login")
        result = AuthResult.from_response(payload)
        self.token = result.session_token
        return result

    def list_identities(self) -> List[Dict[str, Any]]:
        payload = self._request("GET", "/api/users")
        if isinstance(payload, dict):
            payload = payload.get("users") or []
        return [u for u in (payload or []) if isinstance(u, dict)]

    def get_identity(self, identity: Union[int, str]) -> Dict[str, Any]:
        payload = self._request("GET", f"/api/users/{identity}")
        return payload if isinstance(payload, dict) else {}

    def update_identity(self, identity: Union[int, str], patch: Dict[str, Any]) -> Dict[str, Any]:
        payload = self._request("PUT", f"/api/users/{identity}", dict(patch))
        return payload if isinstance(payload, dict) else {}
