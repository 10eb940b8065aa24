from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class Identity(BaseModel):
    """Canonical reference to one user, whichever field name the source used."""

    model_config = ConfigDict(frozen=True)

    value: Union[int, str]

    @field_validator("value")
    @classmethod
    def _non_empty(cls, v: Union[int, str]) -> Union[int, str]:
        if isinstance(v, bool):
            raise ValueError("identity must be an int or str")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("identity must not be empty")
        return v

    @property
    def id(self) -> Union[int, str]:
        return self.value

    @property
    def user_id(self) -> Union[int, str]:
        return self.value

    @property
    def key(self) -> str:
        """Storage key; 42 and "42" address the same user."""
        return str(self.value)

    def __str__(self) -> str:
        return self.key
