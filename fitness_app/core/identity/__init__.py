from __future__ import annotations

"""
Identity normalization.

Endpoints disagree on whether a user is keyed by `id` or `userId`; everything
downstream works on the normalized form.
"""

from fitness_app.core.identity.models import Identity, UserRole
from fitness_app.core.identity.normalizer import IdentityLike, identity_key, normalize_identity, resolve_identity

__all__ = ["Identity", "IdentityLike", "UserRole", "identity_key", "normalize_identity", "resolve_identity"]
