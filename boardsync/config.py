"""Process-wide configuration for the boardsync service.

``SyncConfig`` is built once at startup and threaded explicitly into the
GitHub client, the sync service and the HTTP layer.  It is immutable; no
component re-reads the environment after startup.

Usage
-----
Load configuration from the environment:

>>> import os
>>> os.environ.update(
...     BOARDSYNC_WEBHOOK_SECRET="s3cret",
...     BOARDSYNC_GITHUB_TOKEN="ghp_example",
...     BOARDSYNC_PROJECT_ID="PVT_example",
...     BOARDSYNC_ALLOWED_REPOS="reef, lagoon",
... )
>>> config = SyncConfig.from_env()
>>> sorted(config.allowed_repos)
['lagoon', 'reef']

"""

from __future__ import annotations

import dataclasses as dc
import os

from boardsync import __version__

__all__ = ["ConfigError", "SyncConfig", "parse_repo_list"]

_DEFAULT_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or invalid."""

    @classmethod
    def missing(cls, env_var: str) -> ConfigError:
        """Return an error for an unset or blank environment variable."""
        return cls(f"{env_var} is required")

    @classmethod
    def invalid(cls, env_var: str, raw: str, reason: str) -> ConfigError:
        """Return an error for an environment variable that failed parsing."""
        return cls(f"{env_var}={raw!r} is invalid: {reason}")


def parse_repo_list(raw: str) -> frozenset[str]:
    """Split a comma-separated repository list, dropping blanks.

    Examples
    --------
    >>> sorted(parse_repo_list("reef,, lagoon "))
    ['lagoon', 'reef']

    """
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def _required(env_var: str) -> str:
    value = os.environ.get(env_var, "").strip()
    if not value:
        raise ConfigError.missing(env_var)
    return value


@dc.dataclass(frozen=True, slots=True)
class SyncConfig:
    """Immutable runtime configuration.

    Attributes
    ----------
    webhook_secret
        Shared secret used to verify ``X-Hub-Signature-256`` headers.
    github_token
        Bearer token for REST and GraphQL calls.
    project_id
        Node id of the target ProjectV2 board.
    allowed_repos
        Repository short names whose deliveries are processed.
    api_url
        API host root; REST paths and ``/graphql`` are joined onto it.
    timeout_s
        Outbound transport timeout in seconds.

    """

    webhook_secret: str
    github_token: str
    project_id: str
    allowed_repos: frozenset[str] = frozenset()
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = f"boardsync/{__version__}"

    @property
    def graphql_url(self) -> str:
        """Return the GraphQL endpoint under :attr:`api_url`."""
        return f"{self.api_url.rstrip('/')}/graphql"

    @classmethod
    def from_env(cls) -> SyncConfig:
        """Create configuration from ``BOARDSYNC_*`` environment variables.

        Raises
        ------
        ConfigError
            If a required variable is unset or the timeout is not a
            positive number.

        """
        raw_timeout = os.environ.get("BOARDSYNC_HTTP_TIMEOUT_S", "").strip()
        timeout_s = _DEFAULT_TIMEOUT_S
        if raw_timeout:
            try:
                timeout_s = float(raw_timeout)
            except ValueError as exc:
                raise ConfigError.invalid(
                    "BOARDSYNC_HTTP_TIMEOUT_S", raw_timeout, "not a number"
                ) from exc
            if timeout_s <= 0:
                raise ConfigError.invalid(
                    "BOARDSYNC_HTTP_TIMEOUT_S", raw_timeout, "must be positive"
                )

        api_url = os.environ.get("BOARDSYNC_GITHUB_API_URL", "").strip()
        return cls(
            webhook_secret=_required("BOARDSYNC_WEBHOOK_SECRET"),
            github_token=_required("BOARDSYNC_GITHUB_TOKEN"),
            project_id=_required("BOARDSYNC_PROJECT_ID"),
            allowed_repos=parse_repo_list(
                os.environ.get("BOARDSYNC_ALLOWED_REPOS", "")
            ),
            api_url=api_url or _DEFAULT_API_URL,
            timeout_s=timeout_s,
        )
