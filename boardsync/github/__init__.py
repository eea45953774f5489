"""GitHub REST and GraphQL access for project board synchronisation."""

from __future__ import annotations

from .client import GitHubClient, api_url_for
from .errors import (
    GitHubAPIError,
    GitHubResponseShapeError,
    GitHubTransportError,
    GitHubUpstreamError,
    StatusFieldMismatchError,
)
from .projects import ProjectItemLinker, StatusFieldSynchronizer, find_status_field

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "GitHubResponseShapeError",
    "GitHubTransportError",
    "GitHubUpstreamError",
    "ProjectItemLinker",
    "StatusFieldMismatchError",
    "StatusFieldSynchronizer",
    "api_url_for",
    "find_status_field",
]
