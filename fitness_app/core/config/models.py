from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoreConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str = "runtime/overlay_store.json"
    backups_dir: str = "runtime/backups"
    max_backups: int = Field(default=5, ge=0, le=100)


class RemoteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    base_url: str = "http://localhost:8000"
    timeout_seconds: float = Field(default=10.0, gt=0, le=300)

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        v = str(v or "").strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v.rstrip("/")


class OverlayPolicyConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    suspension_hours: int = Field(default=24, ge=1, le=24 * 365)
    activity_retention_hours: int = Field(default=24, ge=1, le=24 * 365)


class WebConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = True
    bind_host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)
    session_ttl_hours: int = Field(default=12, ge=1)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    log_dir: str = "logs"
    level: str = "INFO"
    max_bytes: int = Field(default=1_000_000, ge=1024)
    backup_count: int = Field(default=5, ge=0)
    console: bool = True


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    config_version: int = Field(default=1, ge=1)
    store: StoreConfig = Field(default_factory=StoreConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    overlay: OverlayPolicyConfig = Field(default_factory=OverlayPolicyConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
