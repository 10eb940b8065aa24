from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActivityType(str, Enum):
    LOGIN = "login"
    LOGOUT = "logout"
    PROFILE_UPDATE = "profile_update"
    WORKOUT_COMPLETED = "workout_completed"
    NUTRITION_PLAN_COMPLETED = "nutrition_plan_completed"
    PASSWORD_CHANGED = "password_changed"
    ROLE_CHANGED = "role_changed"
    SUBSCRIPTION_UPDATED = "subscription_updated"
    ACCOUNT_DELETED = "account_deleted"
    ACCOUNT_SUSPENDED = "account_suspended"
    ACCOUNT_REACTIVATED = "account_reactivated"


class ActivityEvent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    identity: str = Field(min_length=1)
    type: str
    description: str = ""
    timestamp: str
