"""Headless sync client: local cache, REST client, live channel, reconciliation."""

from medicall.client.api import SyncApiClient
from medicall.client.cache import ClientCache
from medicall.client.controller import BackupBundle, ReconciliationController
from medicall.client.live_channel import LiveChannel

__all__ = [
    "SyncApiClient",
    "ClientCache",
    "BackupBundle",
    "ReconciliationController",
    "LiveChannel",
]
