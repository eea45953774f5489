"""Behavioural coverage for webhook-driven project board updates."""

from __future__ import annotations

import typing as typ

import falcon.testing
import httpx
import pytest
from pytest_bdd import given, parsers, scenario, then, when

from boardsync.api import AppDependencies, create_app
from boardsync.config import SyncConfig
from boardsync.github.client import GitHubClient
from boardsync.sync import WebhookSyncService, WebhookSyncServiceDependencies
from tests.helpers.github_fake import (
    API_URL,
    DEFAULT_ITEM_ID,
    DONE_OPTION_ID,
    PROJECT_ID,
    TODO_OPTION_ID,
    FakeGitHub,
    status_field,
)
from tests.helpers.webhooks import (
    WEBHOOK_SECRET,
    delivery_headers,
    encode,
    issue_payload,
    pull_request_payload,
)

if typ.TYPE_CHECKING:
    from falcon.testing.client import Result

_OPTION_IDS = {"Todo": TODO_OPTION_ID, "Done": DONE_OPTION_ID}


class SyncContext(typ.TypedDict, total=False):
    """Shared mutable scenario state."""

    fake: FakeGitHub
    client: falcon.testing.TestClient
    response: Result


@scenario("../webhook_sync.feature", "Opened issue is added to the board as Todo")
def test_opened_issue_added() -> None:
    """Wrap the pytest-bdd scenario for opened issues."""


@scenario("../webhook_sync.feature", "Merged pull request moves to Done")
def test_merged_pull_request_done() -> None:
    """Wrap the pytest-bdd scenario for merged pull requests."""


@scenario("../webhook_sync.feature", "Delivery signed with the wrong secret is rejected")
def test_wrong_secret_rejected() -> None:
    """Wrap the pytest-bdd scenario for forged deliveries."""


@scenario("../webhook_sync.feature", "Delivery from an untracked repository is ignored")
def test_untracked_repo_ignored() -> None:
    """Wrap the pytest-bdd scenario for untracked repositories."""


@scenario(
    "../webhook_sync.feature", "Board without a Status field leaves the item linked"
)
def test_missing_status_field() -> None:
    """Wrap the pytest-bdd scenario for status field drift."""


@pytest.fixture
def sync_context() -> SyncContext:
    """Provide empty scenario state."""
    return {}


@given(parsers.parse('a running boardsync app tracking "{repo}"'))
def given_running_app(sync_context: SyncContext, repo: str) -> None:
    """Build the app against a GitHub fake."""
    fake = FakeGitHub()
    config = SyncConfig(
        webhook_secret=WEBHOOK_SECRET,
        github_token="ghp_bdd",
        project_id=PROJECT_ID,
        allowed_repos=frozenset({repo}),
        api_url=API_URL,
    )
    github = GitHubClient(
        config, http_client=httpx.AsyncClient(transport=fake.transport())
    )
    service = WebhookSyncService(
        WebhookSyncServiceDependencies.from_client(config, github)
    )
    sync_context["fake"] = fake
    sync_context["client"] = falcon.testing.TestClient(
        create_app(AppDependencies(service=service, client=github))
    )


@given(parsers.parse('the project board has no "{field}" field'))
def given_board_without_field(sync_context: SyncContext, field: str) -> None:
    """Replace the board's fields with ones lacking ``field``."""
    sync_context["fake"].fields = [
        {},
        status_field(("x1", "Todo"), ("x2", "Done"), name=f"Not {field}"),
    ]


def _deliver(
    sync_context: SyncContext,
    event_type: str,
    payload: dict[str, typ.Any],
    *,
    secret: str = WEBHOOK_SECRET,
) -> None:
    body = encode(payload)
    sync_context["response"] = sync_context["client"].simulate_post(
        "/webhook/github",
        body=body,
        headers=delivery_headers(body, event_type, secret=secret),
    )


def _payload(event_type: str, action: str, repo: str, **extra: typ.Any) -> dict:
    if event_type == "pull_request":
        return pull_request_payload(action, repo=repo, **extra)
    return issue_payload(action, repo=repo)


@when(
    parsers.parse(
        'a signed "{event_type}" delivery with action "{action}" arrives for "{repo}"'
    )
)
def when_signed_delivery(
    sync_context: SyncContext, event_type: str, action: str, repo: str
) -> None:
    """Post a correctly signed delivery."""
    _deliver(sync_context, event_type, _payload(event_type, action, repo))


@when(
    parsers.parse(
        'a signed merged "{event_type}" delivery with action "{action}" '
        'arrives for "{repo}"'
    )
)
def when_signed_merged_delivery(
    sync_context: SyncContext, event_type: str, action: str, repo: str
) -> None:
    """Post a correctly signed delivery for a merged pull request."""
    _deliver(sync_context, event_type, _payload(event_type, action, repo, merged=True))


@when(
    parsers.parse(
        'an "{event_type}" delivery signed with the wrong secret arrives for "{repo}"'
    )
)
def when_forged_delivery(sync_context: SyncContext, event_type: str, repo: str) -> None:
    """Post a delivery signed with a different secret."""
    _deliver(
        sync_context,
        event_type,
        _payload(event_type, "opened", repo),
        secret="guessed secret",
    )


@then(parsers.parse("the response status is {status:d}"))
def then_response_status(sync_context: SyncContext, status: int) -> None:
    """Assert the HTTP response status code."""
    response = sync_context["response"]
    assert response.status_code == status, (
        f"expected status {status}, got {response.status_code}: {response.text}"
    )


@then(parsers.parse('the response body has status "{label}" and the item id'))
def then_applied_body(sync_context: SyncContext, label: str) -> None:
    """Assert the applied response body."""
    assert sync_context["response"].json == {
        "status": label,
        "item_id": DEFAULT_ITEM_ID,
    }


@then(parsers.parse('the response body is ignored because "{reason}"'))
def then_ignored_body(sync_context: SyncContext, reason: str) -> None:
    """Assert the ignored response body."""
    assert sync_context["response"].json == {"status": "ignored", "reason": reason}


@then(parsers.parse('GitHub received calls "{operations}"'))
def then_github_calls(sync_context: SyncContext, operations: str) -> None:
    """Assert the exact sequence of outbound operations."""
    expected = [part.strip() for part in operations.split(",")]
    assert sync_context["fake"].operations == expected


@then("GitHub received no calls")
def then_no_github_calls(sync_context: SyncContext) -> None:
    """Assert that nothing was sent to GitHub."""
    assert sync_context["fake"].calls == []


@then(parsers.parse('the status option written is "{label}"'))
def then_status_option(sync_context: SyncContext, label: str) -> None:
    """Assert the option id sent in the update mutation."""
    (update,) = sync_context["fake"].calls_for("update")
    assert update.body is not None
    assert update.body["variables"]["optionId"] == _OPTION_IDS[label]
