from __future__ import annotations

from typing import Any, Dict


REDACT_KEYS = {
    "password",
    "token",
    "session_token",
    "api_token",
    "authorization",
    "secret",
}


def redact(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if str(k).lower() in REDACT_KEYS:
                out[k] = "***REDACTED***"
            else:
                out[k] = redact(v)
        return out
    if isinstance(obj, list):
        return [redact(x) for x in obj]
    return obj
