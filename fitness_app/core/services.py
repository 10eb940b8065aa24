from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from fitness_app.core.activity import ActivityLedger
from fitness_app.core.config.models import AppConfig
from fitness_app.core.directory import DirectoryView, ProfileService
from fitness_app.core.overlay import DeletionOverlay, SuspensionOverlay
from fitness_app.core.persistence import JsonFileKeyValueStore, KeyValueStore, OverlayStore
from fitness_app.core.remote import DirectoryClient, HttpDirectoryClient
from fitness_app.core.session import SessionGuard
from fitness_app.core.timeutil import HOUR_SECONDS, Clock


@dataclass
class OverlayServices:
    store: OverlayStore
    ledger: ActivityLedger
    suspensions: SuspensionOverlay
    deletions: DeletionOverlay
    guard: SessionGuard
    directory: DirectoryClient
    users: DirectoryView
    profiles: ProfileService


def build_services(
    cfg: AppConfig,
    *,
    kv: Optional[KeyValueStore] = None,
    directory: Optional[DirectoryClient] = None,
    clock: Clock = time.time,
    logger: Any = None,
) -> OverlayServices:
    """Construct the overlay once per process; every component shares one store."""
    logger = logger or logging.getLogger("fitness_app")
    if kv is None:
        kv = JsonFileKeyValueStore(cfg.store.path, backups_dir=cfg.store.backups_dir, max_backups=cfg.store.max_backups, logger=logger)
    if directory is None:
        directory = HttpDirectoryClient(cfg.remote.base_url, timeout_seconds=cfg.remote.timeout_seconds, logger=logger)

    store = OverlayStore(kv, logger=logger)
    ledger = ActivityLedger(store, retention_seconds=cfg.overlay.activity_retention_hours * HOUR_SECONDS, clock=clock, logger=logger)
    suspensions = SuspensionOverlay(store, ledger, duration_seconds=cfg.overlay.suspension_hours * HOUR_SECONDS, clock=clock, logger=logger)
    deletions = DeletionOverlay(store, ledger, logger=logger)
    guard = SessionGuard(store=store, suspensions=suspensions, ledger=ledger, directory=directory, clock=clock, logger=logger)
    return OverlayServices(
        store=store,
        ledger=ledger,
        suspensions=suspensions,
        deletions=deletions,
        guard=guard,
        directory=directory,
        users=DirectoryView(directory=directory, deletions=deletions, suspensions=suspensions, logger=logger),
        profiles=ProfileService(directory=directory, ledger=ledger, logger=logger),
    )
