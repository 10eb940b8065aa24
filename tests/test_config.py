from __future__ import annotations

import json

import pytest

from fitness_app.core.config import AppConfig, load_config
from fitness_app.core.errors import AccountSuspendedError, ConfigError


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(str(tmp_path / "nope.json"), env={})
    assert cfg == AppConfig()
    assert cfg.overlay.suspension_hours == 24
    assert cfg.overlay.activity_retention_hours == 24
    assert cfg.remote.base_url == "http://localhost:8000"


def test_file_values_and_env_override(tmp_path):
    path = tmp_path / "app.json"
    path.write_text(json.dumps({"remote": {"base_url": "http://api.local/", "timeout_seconds": 5}, "web": {"port": 9000}}), encoding="utf-8")
    cfg = load_config(str(path), env={})
    assert cfg.remote.base_url == "http://api.local"
    assert cfg.web.port == 9000

    cfg2 = load_config(str(path), env={"FITNESS_API_URL": "https://prod.example.com"})
    assert cfg2.remote.base_url == "https://prod.example.com"
    assert cfg2.remote.timeout_seconds == 5


def test_config_path_from_env(tmp_path):
    path = tmp_path / "other.json"
    path.write_text(json.dumps({"overlay": {"suspension_hours": 48}}), encoding="utf-8")
    assert load_config(env={"FITNESS_CONFIG": str(path)}).overlay.suspension_hours == 48


@pytest.mark.parametrize(
    "content",
    [
        "{ not json",
        json.dumps({"unknown_section": {}}),
        json.dumps({"remote": {"base_url": "ftp://x"}}),
        json.dumps({"overlay": {"suspension_hours": 0}}),
    ],
)
def test_invalid_config_raises(tmp_path, content):
    path = tmp_path / "app.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path), env={})


def test_error_to_dict_redacts_context():
    err = AccountSuspendedError("locked", identity="42", token="abc")
    d = err.to_dict()
    assert d["code"] == "account_suspended"
    assert d["context"] == {"identity": "42", "token": "***REDACTED***"}
    assert str(err) == "locked"
