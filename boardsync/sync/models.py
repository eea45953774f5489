"""Outcome of processing one webhook delivery."""

from __future__ import annotations

import typing as typ

import msgspec

from boardsync.webhook.models import Ignored, ProjectStatus

__all__ = ["Applied", "Ignored", "SyncOutcome", "outcome_body"]


class Applied(msgspec.Struct, kw_only=True, frozen=True, tag="applied"):
    """The delivery's resource is on the board with ``status`` set."""

    item_id: str
    status: ProjectStatus


SyncOutcome: typ.TypeAlias = Applied | Ignored

_APPLIED_LABELS = {ProjectStatus.TODO: "added", ProjectStatus.DONE: "done"}


def outcome_body(outcome: SyncOutcome) -> dict[str, str]:
    """Render an outcome as the JSON body returned to GitHub.

    Examples
    --------
    >>> outcome_body(Ignored(reason="repo not tracked"))
    {'status': 'ignored', 'reason': 'repo not tracked'}
    >>> outcome_body(Applied(item_id="PVTI_1", status=ProjectStatus.DONE))
    {'status': 'done', 'item_id': 'PVTI_1'}

    """
    match outcome:
        case Ignored(reason=reason):
            return {"status": "ignored", "reason": str(reason)}
        case Applied(item_id=item_id, status=status):
            return {"status": _APPLIED_LABELS[status], "item_id": item_id}
