"""Application factory for the boardsync Falcon ASGI application.

This module provides ``create_app()`` which builds the Falcon ASGI
application with the health endpoint and, when a sync service is supplied,
the GitHub webhook receiver.

Usage
-----
Create a health-only app::

    app = create_app()

Create a full app::

    from boardsync.api.app import AppDependencies, create_app

    deps = AppDependencies(service=service, client=client)
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from boardsync.api.errors import register_error_handlers
from boardsync.api.health.resources import HealthResource

if typ.TYPE_CHECKING:
    from boardsync.github.client import GitHubClient
    from boardsync.sync.service import WebhookSyncService

__all__ = ["AppDependencies", "create_app"]

WEBHOOK_ROUTE = "/webhook/github"


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    service
        Sync service processing webhook deliveries.
    client
        Shared GitHub client; when provided it is closed on ASGI shutdown.

    """

    service: WebhookSyncService
    client: GitHubClient | None = None


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Without *dependencies* only ``GET /health`` is registered.  With them,
    ``POST /webhook/github`` is added and the error handlers mapping
    signature, payload and upstream failures to 401, 400 and 502 are
    installed.

    Parameters
    ----------
    dependencies
        Optional application dependencies.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    middleware: list[object] = []
    if dependencies is not None and dependencies.client is not None:
        from boardsync.api.middleware import GitHubClientLifespan

        middleware.append(GitHubClientLifespan(dependencies.client))

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())

    if dependencies is not None:
        from boardsync.api.webhook.resources import GitHubWebhookResource

        app.add_route(WEBHOOK_ROUTE, GitHubWebhookResource(dependencies.service))

    register_error_handlers(app)
    return app
