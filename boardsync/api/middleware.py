"""ASGI lifespan middleware owning the shared GitHub client.

The GitHub client pools outbound connections across every delivery.  It is
created before the app starts and closed when the ASGI server sends the
lifespan shutdown event, so pooled connections are released cleanly.

Usage
-----
Register the middleware when creating the Falcon app::

    from boardsync.api.middleware import GitHubClientLifespan

    app = falcon.asgi.App(middleware=[GitHubClientLifespan(client)])

"""

from __future__ import annotations

import typing as typ

import httpx

from boardsync.logging import get_logger, log_error, log_info

if typ.TYPE_CHECKING:
    from boardsync.github.client import GitHubClient

__all__ = ["GitHubClientLifespan"]

logger = get_logger(__name__)


class GitHubClientLifespan:
    """Falcon middleware closing the shared GitHub client on shutdown.

    Parameters
    ----------
    client
        The process-wide GitHub client.

    """

    def __init__(self, client: GitHubClient) -> None:
        """Initialize the middleware with the shared client."""
        self._client = client

    async def process_startup(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Log that the app is ready to accept deliveries."""
        log_info(logger, "boardsync accepting webhook deliveries")

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Close the pooled HTTP client."""
        try:
            await self._client.aclose()
        except httpx.HTTPError:
            log_error(logger, "Closing the GitHub client failed", exc_info=True)
            raise
