"""Inbound webhook intake: signature verification and event classification."""

from __future__ import annotations

from .classifier import classify, decode_payload, to_event
from .errors import MalformedPayloadError, SignatureVerificationError, WebhookIntakeError
from .models import (
    ClassifiedEvent,
    IgnoreReason,
    Ignored,
    IssueEvent,
    ProjectStatus,
    PullRequestEvent,
    SyncRequest,
    UnrecognizedEvent,
    WebhookEnvelope,
    WebhookPayload,
)
from .signature import compute_signature, require_valid_signature, verify

__all__ = [
    "ClassifiedEvent",
    "IgnoreReason",
    "Ignored",
    "IssueEvent",
    "MalformedPayloadError",
    "ProjectStatus",
    "PullRequestEvent",
    "SignatureVerificationError",
    "SyncRequest",
    "UnrecognizedEvent",
    "WebhookEnvelope",
    "WebhookIntakeError",
    "WebhookPayload",
    "classify",
    "compute_signature",
    "decode_payload",
    "require_valid_signature",
    "to_event",
    "verify",
]
