from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthResult(BaseModel):
    """What the remote login endpoint hands back, before any overlay check."""

    model_config = ConfigDict(extra="ignore")

    user: Dict[str, Any] = Field(default_factory=dict)
    display_name: str = ""
    email: Optional[str] = None
    role: str = "user"
    session_token: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "AuthResult":
        user = payload.get("user") or {}
        if not isinstance(user, dict):
            user = {}
        name = user.get("fullName") or user.get("full_name") or user.get("name") or ""
        return cls(
            user=user,
            display_name=str(name),
            email=user.get("email"),
            role=str(user.get("role") or "user"),
            session_token=payload.get("token"),
        )
