"""boardsync runtime entrypoint.

``create_app`` is the Granian ASGI factory: it loads :class:`SyncConfig`
from the environment, builds the shared GitHub client and the sync
service, and returns the Falcon application.

Configuration is driven by environment variables:

- ``BOARDSYNC_WEBHOOK_SECRET``, ``BOARDSYNC_GITHUB_TOKEN``,
  ``BOARDSYNC_PROJECT_ID``, ``BOARDSYNC_ALLOWED_REPOS``: see
  :class:`boardsync.config.SyncConfig`
- ``BOARDSYNC_HOST``: Bind address (default ``0.0.0.0``)
- ``BOARDSYNC_PORT``: Listen port (default ``3000``)
- ``BOARDSYNC_LOG_LEVEL``: Log level (default ``INFO``)

Run the service directly with ``python -m boardsync.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from boardsync.config import ConfigError, SyncConfig
from boardsync.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

    from boardsync.api.app import AppDependencies

__all__ = ["build_dependencies", "create_app", "main"]

logger = get_logger(__name__)

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid BOARDSYNC_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def build_dependencies(config: SyncConfig) -> AppDependencies:
    """Assemble the GitHub client, sync service and app dependencies."""
    from boardsync.api.app import AppDependencies
    from boardsync.github.client import GitHubClient
    from boardsync.sync.service import (
        WebhookSyncService,
        WebhookSyncServiceDependencies,
    )

    client = GitHubClient(config)
    service = WebhookSyncService(
        WebhookSyncServiceDependencies.from_client(config, client)
    )
    return AppDependencies(service=service, client=client)


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from environment configuration.

    Raises
    ------
    SystemExit
        If required configuration is missing or invalid.

    """
    from boardsync.api.app import create_app as _create_api_app

    try:
        config = SyncConfig.from_env()
    except ConfigError as exc:
        log_error(logger, "Invalid configuration: %s", exc)
        raise SystemExit(1) from exc

    if not config.allowed_repos:
        log_warning(
            logger,
            "BOARDSYNC_ALLOWED_REPOS is empty; every delivery will be ignored",
        )
    log_info(
        logger,
        "Syncing repos %s to project %s",
        ", ".join(sorted(config.allowed_repos)) or "-",
        config.project_id,
    )
    return _create_api_app(build_dependencies(config))


def main() -> None:
    """Start the boardsync server using Granian.

    Reads ``BOARDSYNC_HOST``, ``BOARDSYNC_PORT`` and ``BOARDSYNC_LOG_LEVEL``
    from the environment and starts the ASGI server.
    """
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("BOARDSYNC_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("BOARDSYNC_PORT", "3000"))
    log_level_str = os.environ.get("BOARDSYNC_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid BOARDSYNC_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting boardsync on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "boardsync.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
