"""In-memory fake of the GitHub REST and GraphQL endpoints.

The fake is mounted behind ``httpx.MockTransport`` so the real
:class:`~boardsync.github.client.GitHubClient` code path runs unchanged.
Each request is classified into one of four operations:

- ``resolve``: ``GET /repos/{owner}/{repo}/{issues|pulls}/{n}``
- ``add_item``: ``addProjectV2ItemById`` mutation
- ``fields``: project field list query
- ``update``: ``updateProjectV2ItemFieldValue`` mutation
"""

from __future__ import annotations

import dataclasses
import json
import typing as typ

import httpx

Operation = typ.Literal["resolve", "add_item", "fields", "update"]

PROJECT_ID = "PVT_kwHOproject"
API_URL = "https://api.example.test"
DEFAULT_NODE_ID = "I_kwDOnode1"
DEFAULT_ITEM_ID = "PVTI_lADOitem1"
STATUS_FIELD_ID = "PVTSSF_status"
TODO_OPTION_ID = "f75ad846"
DONE_OPTION_ID = "98236657"


def status_field(
    *options: tuple[str, str], name: str = "Status", field_id: str = STATUS_FIELD_ID
) -> dict[str, typ.Any]:
    """Return a single-select field node with ``(option_id, label)`` options."""
    return {
        "id": field_id,
        "name": name,
        "options": [{"id": option_id, "name": label} for option_id, label in options],
    }


def default_fields() -> list[dict[str, typ.Any]]:
    """Return a realistic first page of project fields."""
    return [
        {},  # Title: not single-select, matches no fragment
        {},  # Assignees
        status_field(
            (TODO_OPTION_ID, "Todo"),
            ("47fc9ee4", "In Progress"),
            (DONE_OPTION_ID, "Done"),
        ),
        status_field(("aa11", "P0"), ("bb22", "P1"), name="Priority", field_id="PVTSSF_prio"),
    ]


@dataclasses.dataclass(slots=True)
class RecordedCall:
    """One request received by the fake."""

    operation: Operation
    method: str
    url: str
    headers: dict[str, str]
    body: dict[str, typ.Any] | None


@dataclasses.dataclass(slots=True)
class FakeGitHub:
    """Configurable GitHub stand-in recording every request."""

    node_id: str = DEFAULT_NODE_ID
    item_id: str = DEFAULT_ITEM_ID
    fields: list[dict[str, typ.Any]] = dataclasses.field(default_factory=default_fields)
    overrides: dict[Operation, tuple[int, object]] = dataclasses.field(
        default_factory=dict
    )
    transport_failures: set[Operation] = dataclasses.field(default_factory=set)
    calls: list[RecordedCall] = dataclasses.field(default_factory=list)

    @property
    def operations(self) -> list[Operation]:
        """Return the operations received, in order."""
        return [call.operation for call in self.calls]

    def calls_for(self, operation: Operation) -> list[RecordedCall]:
        """Return the recorded calls for ``operation``."""
        return [call for call in self.calls if call.operation == operation]

    def transport(self) -> httpx.MockTransport:
        """Return an httpx transport routed to this fake."""
        return httpx.MockTransport(self.handle)

    def _classify(self, request: httpx.Request) -> tuple[Operation, dict | None]:
        if not request.url.path.endswith("/graphql"):
            return ("resolve", None)
        body = json.loads(request.content.decode("utf-8"))
        query = body["query"]
        if "addProjectV2ItemById" in query:
            return ("add_item", body)
        if "updateProjectV2ItemFieldValue" in query:
            return ("update", body)
        return ("fields", body)

    def _default_response(self, operation: Operation) -> tuple[int, object]:
        match operation:
            case "resolve":
                return (200, {"id": 1, "number": 7, "node_id": self.node_id})
            case "add_item":
                return (
                    200,
                    {"data": {"addProjectV2ItemById": {"item": {"id": self.item_id}}}},
                )
            case "fields":
                return (200, {"data": {"node": {"fields": {"nodes": self.fields}}}})
            case "update":
                return (
                    200,
                    {
                        "data": {
                            "updateProjectV2ItemFieldValue": {
                                "projectV2Item": {"id": self.item_id}
                            }
                        }
                    },
                )

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Record ``request`` and return the configured response."""
        operation, body = self._classify(request)
        self.calls.append(
            RecordedCall(
                operation=operation,
                method=request.method,
                url=str(request.url),
                headers=dict(request.headers),
                body=body,
            )
        )
        if operation in self.transport_failures:
            msg = f"connection dropped during {operation}"
            raise httpx.ConnectError(msg, request=request)
        status, payload = self.overrides.get(operation) or self._default_response(
            operation
        )
        return httpx.Response(status_code=status, json=payload)
