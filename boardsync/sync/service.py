"""Webhook orchestration: verify, classify, resolve, link, set status.

The four GitHub calls for a delivery run strictly in sequence because each
consumes the previous result.  A failure after linking leaves the item on
the board without a status; the next delivery for the same resource
repairs it, so nothing is rolled back.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from boardsync.github.projects import ProjectItemLinker, StatusFieldSynchronizer
from boardsync.logging import get_logger, log_error, log_info, log_warning
from boardsync.webhook import (
    Ignored,
    MalformedPayloadError,
    SignatureVerificationError,
    classify,
    decode_payload,
    require_valid_signature,
)

from .models import Applied

if typ.TYPE_CHECKING:
    from boardsync.config import SyncConfig
    from boardsync.github.client import GitHubClient
    from boardsync.webhook import SyncRequest, WebhookEnvelope

    from .models import SyncOutcome

__all__ = ["WebhookSyncService", "WebhookSyncServiceDependencies"]

logger = get_logger(__name__)


@dc.dataclass(frozen=True, slots=True)
class WebhookSyncServiceDependencies:
    """Collaborators for :class:`WebhookSyncService`.

    Attributes
    ----------
    config
        Immutable process configuration.
    client
        Shared GitHub client used for node id resolution.
    linker
        Adds resolved resources to the project board.
    synchronizer
        Sets the status field on linked items.

    """

    config: SyncConfig
    client: GitHubClient
    linker: ProjectItemLinker
    synchronizer: StatusFieldSynchronizer

    @classmethod
    def from_client(
        cls, config: SyncConfig, client: GitHubClient
    ) -> WebhookSyncServiceDependencies:
        """Build the default linker and synchronizer around ``client``."""
        return cls(
            config=config,
            client=client,
            linker=ProjectItemLinker(client),
            synchronizer=StatusFieldSynchronizer(client),
        )


class WebhookSyncService:
    """Process GitHub webhook deliveries into project board updates."""

    def __init__(self, dependencies: WebhookSyncServiceDependencies) -> None:
        """Configure the service with its collaborators."""
        self._config = dependencies.config
        self._client = dependencies.client
        self._linker = dependencies.linker
        self._synchronizer = dependencies.synchronizer

    def _verify(self, envelope: WebhookEnvelope) -> None:
        try:
            require_valid_signature(
                self._config.webhook_secret, envelope.body, envelope.signature
            )
        except SignatureVerificationError as exc:
            log_warning(
                logger,
                "Rejected delivery %s: %s",
                envelope.delivery_id or "-",
                exc.reason,
            )
            raise

    def admit(self, envelope: WebhookEnvelope) -> SyncRequest | Ignored:
        """Verify and classify a delivery without contacting GitHub.

        Raises
        ------
        SignatureVerificationError
            If the signature header is missing or wrong.
        MalformedPayloadError
            If the verified body is not a usable event payload.

        """
        self._verify(envelope)
        try:
            payload = decode_payload(envelope.body)
            decision = classify(
                envelope.event_type, payload, self._config.allowed_repos
            )
        except MalformedPayloadError as exc:
            log_error(
                logger,
                "Malformed %s delivery %s: %s",
                envelope.event_type,
                envelope.delivery_id or "-",
                exc.reason,
            )
            raise

        if isinstance(decision, Ignored):
            log_info(
                logger,
                "Ignoring %s delivery from repo %r: %s",
                envelope.event_type,
                payload.repository_name,
                decision.reason,
            )
        return decision

    async def apply(self, request: SyncRequest) -> Applied:
        """Resolve, link and set the status for an admitted delivery.

        Raises
        ------
        GitHubUpstreamError
            If any GitHub call fails; later calls are not attempted.

        """
        event = request.event
        log_info(
            logger,
            "Processing %s %s for %s#%d %r -> %s",
            type(event).__struct_config__.tag,
            event.action,
            event.repository,
            event.number,
            event.title,
            request.target,
        )
        project_id = self._config.project_id
        node_id = await self._client.resolve_node_id(event.url)
        item_id = await self._linker.link(project_id, node_id)
        await self._synchronizer.set_status(project_id, item_id, request.target)
        return Applied(item_id=item_id, status=request.target)

    async def handle(self, envelope: WebhookEnvelope) -> SyncOutcome:
        """Process one delivery end to end.

        Raises
        ------
        SignatureVerificationError
            If the signature header is missing or wrong.
        MalformedPayloadError
            If the verified body is not a usable event payload.
        GitHubUpstreamError
            If any GitHub call fails.

        """
        decision = self.admit(envelope)
        if isinstance(decision, Ignored):
            return decision
        return await self.apply(decision)
