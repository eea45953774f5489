"""Classification of verified deliveries into sync requests.

Only ``issues`` and ``pull_request`` deliveries from tracked repositories
reach the project board.  Opening an issue or pull request requests the
``Todo`` status; closing an issue, or merging a pull request, requests
``Done``.  A pull request closed without merging is left alone so
abandoned work never appears finished.
"""

from __future__ import annotations

import typing as typ

import msgspec

from .errors import MalformedPayloadError
from .models import (
    ClassifiedEvent,
    IgnoreReason,
    Ignored,
    IssueEvent,
    ProjectStatus,
    PullRequestEvent,
    SyncRequest,
    UnrecognizedEvent,
    WebhookPayload,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

__all__ = ["classify", "decode_payload", "to_event"]

_ISSUES_EVENT = "issues"
_PULL_REQUEST_EVENT = "pull_request"
_OPENED = "opened"
_CLOSED = "closed"

_decoder = msgspec.json.Decoder(WebhookPayload)


def decode_payload(body: bytes) -> WebhookPayload:
    """Decode a raw delivery body into the shared envelope.

    Raises
    ------
    MalformedPayloadError
        If the body is not JSON or does not match the envelope shape.

    """
    try:
        return _decoder.decode(body)
    except msgspec.DecodeError as exc:
        raise MalformedPayloadError.undecodable(str(exc)) from exc


def to_event(event_type: str, payload: WebhookPayload) -> ClassifiedEvent:
    """Build the typed event variant for ``event_type``.

    Raises
    ------
    MalformedPayloadError
        If an ``issues`` or ``pull_request`` delivery lacks its resource
        object, or that object has an empty ``html_url``.

    """
    repository = payload.repository_name
    if event_type == _ISSUES_EVENT:
        issue = payload.issue
        if issue is None:
            raise MalformedPayloadError.missing_resource(event_type, "issue")
        if not issue.html_url:
            raise MalformedPayloadError.missing_url(event_type)
        return IssueEvent(
            action=payload.action,
            url=issue.html_url,
            number=issue.number,
            title=issue.title,
            repository=repository,
        )

    if event_type == _PULL_REQUEST_EVENT:
        pull = payload.pull_request
        if pull is None:
            raise MalformedPayloadError.missing_resource(event_type, "pull_request")
        if not pull.html_url:
            raise MalformedPayloadError.missing_url(event_type)
        return PullRequestEvent(
            action=payload.action,
            url=pull.html_url,
            number=pull.number,
            title=pull.title,
            repository=repository,
            merged=pull.merged,
        )

    return UnrecognizedEvent(
        event_type=event_type, action=payload.action, repository=repository
    )


def _target_status(event: IssueEvent | PullRequestEvent) -> ProjectStatus | Ignored:
    if event.action == _OPENED:
        return ProjectStatus.TODO
    if event.action != _CLOSED:
        return Ignored(reason=IgnoreReason.UNSUPPORTED_ACTION)
    if isinstance(event, PullRequestEvent) and event.merged is not True:
        return Ignored(reason=IgnoreReason.CLOSED_UNMERGED)
    return ProjectStatus.DONE


def classify(
    event_type: str,
    payload: WebhookPayload,
    allowed_repos: cabc.Container[str],
) -> SyncRequest | Ignored:
    """Decide whether a delivery should move an item on the board.

    The repository allow-list is checked first, so deliveries from
    untracked repositories are ignored whatever their type or shape.

    Parameters
    ----------
    event_type
        Value of the ``X-GitHub-Event`` header.
    payload
        Decoded delivery body.
    allowed_repos
        Repository short names configured at startup.

    Returns
    -------
    SyncRequest | Ignored
        The event and its target status, or the reason it is out of scope.

    Raises
    ------
    MalformedPayloadError
        If a recognised event lacks the resource object it must carry.

    """
    if payload.repository_name not in allowed_repos:
        return Ignored(reason=IgnoreReason.REPO_NOT_TRACKED)

    event = to_event(event_type, payload)
    match event:
        case UnrecognizedEvent():
            return Ignored(reason=IgnoreReason.UNSUPPORTED_EVENT)
        case IssueEvent() | PullRequestEvent():
            target = _target_status(event)
            if isinstance(target, Ignored):
                return target
            return SyncRequest(event=event, target=target)
