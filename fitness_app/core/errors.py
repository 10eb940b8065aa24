from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from fitness_app.core.redaction import redact


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class FitnessAppError(Exception):
    code: str
    user_message: str
    severity: Severity = Severity.ERROR
    recoverable: bool = True
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.code)

    def __str__(self) -> str:
        return self.user_message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "recoverable": bool(self.recoverable),
            "context": redact(self.context or {}),
        }


class ConfigError(FitnessAppError):
    def __init__(self, user_message: str = "Configuration error.", **ctx: Any):
        super().__init__("config_error", user_message, severity=Severity.CRITICAL, recoverable=False, context=ctx)


class AuthenticationError(FitnessAppError):
    def __init__(self, user_message: str = "Invalid email or password.", **ctx: Any):
        super().__init__("invalid_credentials", user_message, severity=Severity.WARN, recoverable=True, context=ctx)


class AccountSuspendedError(FitnessAppError):
    """Raised when the suspension overlay refuses a session that the remote side accepted."""

    def __init__(self, user_message: str = "Your account is temporarily suspended", **ctx: Any):
        super().__init__("account_suspended", user_message, severity=Severity.WARN, recoverable=True, context=ctx)


class RemoteServiceError(FitnessAppError):
    def __init__(self, user_message: str = "The fitness service is unavailable right now.", **ctx: Any):
        super().__init__("remote_error", user_message, severity=Severity.ERROR, recoverable=True, context=ctx)


class PermissionDeniedError(FitnessAppError):
    def __init__(self, user_message: str = "Permission denied.", **ctx: Any):
        super().__init__("permission_denied", user_message, severity=Severity.WARN, recoverable=False, context=ctx)


class ValidationError(FitnessAppError):
    def __init__(self, user_message: str = "Invalid request.", **ctx: Any):
        super().__init__("validation_error", user_message, severity=Severity.WARN, recoverable=False, context=ctx)
