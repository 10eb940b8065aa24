from __future__ import annotations

from fitness_app.core.directory.listing import STATUS_ACTIVE, STATUS_SUSPENDED, DirectoryView
from fitness_app.core.directory.profile import ProfileService

__all__ = ["DirectoryView", "ProfileService", "STATUS_ACTIVE", "STATUS_SUSPENDED"]
