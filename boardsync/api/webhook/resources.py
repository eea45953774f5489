"""Resource receiving GitHub webhook deliveries.

``POST /webhook/github`` reads the raw body, hands it to the sync service
together with the signature and event headers, and renders the outcome.
Failures propagate as domain exceptions and are mapped to 401, 400 or 502
by the handlers in :mod:`boardsync.api.errors`.

Usage
-----
Register the resource on the Falcon app::

    app.add_route("/webhook/github", GitHubWebhookResource(service))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from boardsync.sync.models import outcome_body
from boardsync.webhook.models import WebhookEnvelope

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from boardsync.sync.service import WebhookSyncService

__all__ = ["GitHubWebhookResource"]

SIGNATURE_HEADER = "X-Hub-Signature-256"
EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"


class GitHubWebhookResource:
    """Receive GitHub ``issues`` and ``pull_request`` deliveries."""

    def __init__(self, service: WebhookSyncService) -> None:
        """Configure the resource with the sync service."""
        self._service = service

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle POST /webhook/github.

        The body is read as bytes before any parsing because the signature
        covers the exact bytes GitHub sent.

        Parameters
        ----------
        req
            Falcon request carrying the delivery.
        resp
            Falcon response populated with the outcome.

        """
        envelope = WebhookEnvelope(
            body=await req.stream.read(),
            signature=req.get_header(SIGNATURE_HEADER),
            event_type=req.get_header(EVENT_HEADER) or "unknown",
            delivery_id=req.get_header(DELIVERY_HEADER),
        )
        outcome = await self._service.handle(envelope)
        resp.media = outcome_body(outcome)
        resp.status = HTTPStatus.OK
