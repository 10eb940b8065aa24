from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from fitness_app.core.persistence.json_file import read_json_object
from fitness_app.core.config.models import AppConfig
from fitness_app.core.errors import ConfigError

ENV_CONFIG_PATH = "FITNESS_CONFIG"
ENV_API_URL = "FITNESS_API_URL"
DEFAULT_CONFIG_PATH = os.path.join("config", "app.json")


def load_config(path: Optional[str] = None, *, env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Load the application config.

    Resolution order: explicit path, $FITNESS_CONFIG, config/app.json. A missing
    file yields defaults. $FITNESS_API_URL overrides remote.base_url.
    """
    env = os.environ if env is None else env
    cfg_path = path or env.get(ENV_CONFIG_PATH) or DEFAULT_CONFIG_PATH
    rr = read_json_object(cfg_path)
    if not rr.ok and not rr.missing:
        raise ConfigError("Config file is unreadable.", path=cfg_path, error=rr.error)

    raw: Dict[str, Any] = dict(rr.data)
    api_url = env.get(ENV_API_URL)
    if api_url:
        remote = dict(raw.get("remote") or {})
        remote["base_url"] = api_url
        raw["remote"] = remote

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError("Config file is invalid.", path=cfg_path, errors=e.errors()) from e
