from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fitness_app.core.identity import UserRole


class StoredCredentials(BaseModel):
    """What survives a restart so the session can be restored."""

    model_config = ConfigDict(extra="ignore")

    identity: Optional[str] = None
    display_name: str = ""
    email: Optional[str] = None
    role: str = UserRole.user.value
    token: Optional[str] = None


class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: Optional[str] = None
    display_name: str = ""
    role: str = UserRole.user.value
    authenticated: bool = False

    @property
    def is_admin(self) -> bool:
        return self.authenticated and self.role == UserRole.admin.value


class LoginStreak(BaseModel):
    model_config = ConfigDict(extra="ignore")

    streak: int = Field(default=0, ge=0)
    last_login_date: Optional[str] = None


ANONYMOUS = Session()
