"""Orchestration of webhook deliveries into project board updates."""

from __future__ import annotations

from .models import Applied, Ignored, SyncOutcome, outcome_body
from .service import WebhookSyncService, WebhookSyncServiceDependencies

__all__ = [
    "Applied",
    "Ignored",
    "SyncOutcome",
    "WebhookSyncService",
    "WebhookSyncServiceDependencies",
    "outcome_body",
]
