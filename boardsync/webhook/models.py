"""Typed shapes for inbound GitHub webhook deliveries.

The raw JSON body is decoded once into :class:`WebhookPayload`; the
classifier then turns it into one variant of :data:`ClassifiedEvent` so
downstream code matches on the variant rather than probing optional
fields.
"""

from __future__ import annotations

import enum
import typing as typ

import msgspec


class ProjectStatus(enum.StrEnum):
    """Status option labels written to the project board."""

    TODO = "Todo"
    DONE = "Done"


class WebhookRepository(msgspec.Struct, kw_only=True):
    """Repository block of a delivery."""

    name: str = ""
    full_name: str = ""


class WebhookIssue(msgspec.Struct, kw_only=True):
    """Issue block of an ``issues`` delivery."""

    html_url: str
    number: int
    title: str


class WebhookPullRequest(msgspec.Struct, kw_only=True):
    """Pull request block of a ``pull_request`` delivery.

    ``merged`` is tri-state: GitHub omits it on some actions, which decodes
    to ``None`` rather than ``False``.
    """

    html_url: str
    number: int
    title: str
    merged: bool | None = None


class WebhookPayload(msgspec.Struct, kw_only=True):
    """Envelope common to every delivery this service understands.

    Unknown keys are ignored so the same envelope decodes ``issues``,
    ``pull_request`` and unrelated events such as ``ping``.
    """

    action: str = ""
    issue: WebhookIssue | None = None
    pull_request: WebhookPullRequest | None = None
    repository: WebhookRepository | None = None

    @property
    def repository_name(self) -> str:
        """Return the repository short name, or ``""`` when absent."""
        return self.repository.name if self.repository is not None else ""


class WebhookEnvelope(msgspec.Struct, kw_only=True, frozen=True):
    """One inbound request as received by the HTTP layer.

    Attributes
    ----------
    body
        Raw, unparsed request body; the signature covers these exact bytes.
    signature
        Value of ``X-Hub-Signature-256``, if present.
    event_type
        Value of ``X-GitHub-Event``; ``"unknown"`` when the header is absent.
    delivery_id
        Value of ``X-GitHub-Delivery`` for log correlation, if present.

    """

    body: bytes
    signature: str | None = None
    event_type: str = "unknown"
    delivery_id: str | None = None


class IssueEvent(msgspec.Struct, kw_only=True, frozen=True, tag="issues"):
    """Classified ``issues`` delivery."""

    action: str
    url: str
    number: int
    title: str
    repository: str


class PullRequestEvent(msgspec.Struct, kw_only=True, frozen=True, tag="pull_request"):
    """Classified ``pull_request`` delivery."""

    action: str
    url: str
    number: int
    title: str
    repository: str
    merged: bool | None = None


class UnrecognizedEvent(msgspec.Struct, kw_only=True, frozen=True, tag="unrecognized"):
    """Delivery of an event type this service does not act on."""

    event_type: str
    action: str
    repository: str


ClassifiedEvent: typ.TypeAlias = IssueEvent | PullRequestEvent | UnrecognizedEvent
ResourceEvent: typ.TypeAlias = IssueEvent | PullRequestEvent


class Ignored(msgspec.Struct, kw_only=True, frozen=True, tag="ignored"):
    """Outcome for a delivery that is valid but out of scope."""

    reason: str


class SyncRequest(msgspec.Struct, kw_only=True, frozen=True, tag="sync"):
    """In-scope delivery together with the board status it should produce."""

    event: ResourceEvent
    target: ProjectStatus


class IgnoreReason(enum.StrEnum):
    """Reasons reported in ``{"status": "ignored"}`` responses."""

    REPO_NOT_TRACKED = "repo not tracked"
    UNSUPPORTED_EVENT = "unsupported event type"
    UNSUPPORTED_ACTION = "unsupported action"
    CLOSED_UNMERGED = "pull request closed without merge"


__all__ = [
    "ClassifiedEvent",
    "IgnoreReason",
    "Ignored",
    "IssueEvent",
    "ProjectStatus",
    "PullRequestEvent",
    "ResourceEvent",
    "SyncRequest",
    "UnrecognizedEvent",
    "WebhookEnvelope",
    "WebhookIssue",
    "WebhookPayload",
    "WebhookPullRequest",
    "WebhookRepository",
]
