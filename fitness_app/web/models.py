from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1, max_length=512)


class SessionResponse(BaseModel):
    identity: Optional[str] = None
    display_name: str = ""
    role: str = "user"
    authenticated: bool = False
    streak: int = 0
    token: Optional[str] = None


class SuspendRequest(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=1000)


class SuspensionResponse(BaseModel):
    identity: str
    is_suspended: bool
    message: Optional[str] = None


class BulkDeleteRequest(BaseModel):
    identities: List[Union[int, str]] = Field(min_length=1, max_length=1000)


class DeleteResponse(BaseModel):
    deleted: List[str]


class ActivityItem(BaseModel):
    id: str
    identity: str
    type: str
    description: str
    timestamp: str


class ActivityResponse(BaseModel):
    identity: str
    events: List[ActivityItem]


class ProfilePatch(BaseModel):
    fields: Dict[str, Any] = Field(min_length=1)
