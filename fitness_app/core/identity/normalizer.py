from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from fitness_app.core.identity.models import Identity

PRIMARY_KEY = "id"
ALIAS_KEY = "userId"
# Some endpoints answer in snake_case.
_SNAKE_ALIAS_KEY = "user_id"

IdentityLike = Union[Identity, int, str, Mapping[str, Any]]


def _usable(v: Any) -> bool:
    if v is None or isinstance(v, bool):
        return False
    if isinstance(v, str):
        return bool(v.strip())
    if isinstance(v, float):
        return v.is_integer()
    return isinstance(v, int)


def _coerce(v: Any) -> Union[int, str]:
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if isinstance(v, str):
        return v.strip()
    return v


def _pick(record: Mapping[str, Any]) -> Optional[Union[int, str]]:
    for k in (PRIMARY_KEY, ALIAS_KEY, _SNAKE_ALIAS_KEY):
        v = record.get(k)
        if _usable(v):
            return _coerce(v)
    return None


def normalize_identity(record: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of `record` where `id` and `userId` are both present and equal.

    The primary key wins when both are set and disagree. A record carrying
    neither field comes back unchanged.
    """
    value = _pick(record)
    out = dict(record)
    if value is None:
        return out
    out[PRIMARY_KEY] = value
    out[ALIAS_KEY] = value
    return out


def resolve_identity(value: Optional[IdentityLike]) -> Optional[Identity]:
    if value is None:
        return None
    if isinstance(value, Identity):
        return value
    if isinstance(value, Mapping):
        picked = _pick(value)
        return Identity(value=picked) if picked is not None else None
    if not _usable(value):
        return None
    return Identity(value=_coerce(value))


def identity_key(value: Optional[IdentityLike]) -> Optional[str]:
    ident = resolve_identity(value)
    return ident.key if ident is not None else None
