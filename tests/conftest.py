"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import falcon.testing
import httpx
import pytest

from boardsync.api import AppDependencies, create_app
from boardsync.config import SyncConfig
from boardsync.github.client import GitHubClient
from boardsync.sync import WebhookSyncService, WebhookSyncServiceDependencies
from tests.helpers.github_fake import API_URL, PROJECT_ID, FakeGitHub
from tests.helpers.webhooks import TRACKED_REPO, WEBHOOK_SECRET

@pytest.fixture
def sync_config() -> SyncConfig:
    """Return configuration tracking two repositories."""
    return SyncConfig(
        webhook_secret=WEBHOOK_SECRET,
        github_token="ghp_test_token",
        project_id=PROJECT_ID,
        allowed_repos=frozenset({TRACKED_REPO, "lagoon"}),
        api_url=API_URL,
    )


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Return a fresh GitHub fake."""
    return FakeGitHub()


@pytest.fixture
def github_client(
    sync_config: SyncConfig, fake_github: FakeGitHub
) -> GitHubClient:
    """Return a GitHub client whose transport is the fake."""
    http_client = httpx.AsyncClient(transport=fake_github.transport())
    return GitHubClient(sync_config, http_client=http_client)


@pytest.fixture
def sync_service(
    sync_config: SyncConfig, github_client: GitHubClient
) -> WebhookSyncService:
    """Return a sync service wired to the fake."""
    return WebhookSyncService(
        WebhookSyncServiceDependencies.from_client(sync_config, github_client)
    )


@pytest.fixture
def app_client(
    sync_service: WebhookSyncService, github_client: GitHubClient
) -> falcon.testing.TestClient:
    """Return a Falcon test client for the full application."""
    return falcon.testing.TestClient(
        create_app(AppDependencies(service=sync_service, client=github_client))
    )
