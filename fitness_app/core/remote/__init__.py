from __future__ import annotations

from fitness_app.core.remote.client import DirectoryClient, HttpDirectoryClient
from fitness_app.core.remote.models import AuthResult

__all__ = ["AuthResult", "DirectoryClient", "HttpDirectoryClient"]
