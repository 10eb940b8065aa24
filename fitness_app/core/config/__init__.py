from __future__ import annotations

from fitness_app.core.config.loader import load_config
from fitness_app.core.config.models import AppConfig

__all__ = ["AppConfig", "load_config"]
