"""Shared GitHub HTTP client and the node-id resolver.

One :class:`GitHubClient` is created at startup and shared by every
delivery.  It wraps a pooled ``httpx.AsyncClient`` carrying the bearer
token, decodes each response once into the typed shapes in
:mod:`boardsync.github.models`, and turns every transport, status and
shape failure into a :class:`~boardsync.github.errors.GitHubUpstreamError`.
No call is retried; GitHub redelivers webhooks whose handling failed.
"""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit

import httpx
import msgspec

from boardsync.logging import get_logger, log_error, log_info

from .errors import GitHubAPIError, GitHubResponseShapeError, GitHubTransportError
from .models import GraphQLResponse, ResourceNode

if typ.TYPE_CHECKING:
    from boardsync.config import SyncConfig

__all__ = ["GitHubClient", "api_url_for"]

logger = get_logger(__name__)

T = typ.TypeVar("T")

_REST_ACCEPT = "application/vnd.github+json"
_RESOLVE_OPERATION = "resolve node id"

# Web path fragment -> REST collection name
_RESOURCE_COLLECTIONS = {"issues": "issues", "pull": "pulls"}
_RESOURCE_PATH_PARTS = 4


def api_url_for(resource_url: str, api_url: str) -> str:
    """Map an issue or pull request web URL to its REST endpoint.

    Examples
    --------
    >>> api_url_for("https://github.com/octo/reef/pull/7", "https://api.github.com")
    'https://api.github.com/repos/octo/reef/pulls/7'
    >>> api_url_for("https://github.com/octo/reef/issues/3", "https://api.github.com")
    'https://api.github.com/repos/octo/reef/issues/3'

    Raises
    ------
    GitHubAPIError
        If the URL is not ``/{owner}/{repo}/{issues|pull}/{number}``.

    """
    parts = [part for part in urlsplit(resource_url).path.split("/") if part]
    if len(parts) != _RESOURCE_PATH_PARTS:
        raise GitHubAPIError.unresolvable_url(resource_url)
    owner, repo, kind, number = parts
    collection = _RESOURCE_COLLECTIONS.get(kind)
    if collection is None or not number.isdigit():
        raise GitHubAPIError.unresolvable_url(resource_url)
    return f"{api_url.rstrip('/')}/repos/{owner}/{repo}/{collection}/{number}"


class GitHubClient:
    """Authenticated access to GitHub REST and GraphQL endpoints."""

    def __init__(
        self,
        config: SyncConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client, creating a pooled HTTP client if none is given."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)
        self._headers = {
            "Authorization": f"Bearer {config.github_token}",
            "User-Agent": config.user_agent,
        }

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json: object | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method, url, headers=self._headers | (headers or {}), json=json
            )
        except httpx.HTTPError as exc:
            log_error(logger, "GitHub request for %s failed: %s", operation, exc)
            raise GitHubTransportError.request_failed(operation, exc) from exc

        if not response.is_success:
            log_error(
                logger,
                "GitHub returned HTTP %d for %s: %s",
                response.status_code,
                operation,
                response.text,
            )
            raise GitHubAPIError.http_error(operation, response.status_code)
        return response

    @staticmethod
    def _decode(operation: str, response: httpx.Response, type_: type[T]) -> T:
        try:
            return msgspec.json.decode(response.content, type=type_)
        except msgspec.DecodeError as exc:
            log_error(
                logger,
                "Undecodable GitHub response for %s: %s",
                operation,
                response.text,
            )
            raise GitHubResponseShapeError.undecodable(operation, str(exc)) from exc

    async def graphql(
        self,
        operation: str,
        query: str,
        variables: dict[str, typ.Any],
        data_type: type[T],
    ) -> T:
        """Execute a GraphQL document and return its decoded ``data``.

        Parameters
        ----------
        operation
            Short name used in logs and errors.
        query
            GraphQL query or mutation text.
        variables
            Variables for the document.
        data_type
            Struct describing the expected ``data`` object.

        Raises
        ------
        GitHubAPIError
            On a non-2xx status or a non-empty ``errors`` list, even when
            the HTTP status was 200.
        GitHubResponseShapeError
            If the body cannot be decoded or carries no ``data``.

        """
        response = await self._send(
            operation,
            "POST",
            self._config.graphql_url,
            json={"query": query, "variables": variables},
        )
        payload = self._decode(operation, response, GraphQLResponse[data_type])
        if payload.errors:
            messages = [error.message for error in payload.errors]
            log_error(logger, "GitHub GraphQL errors for %s: %s", operation, messages)
            raise GitHubAPIError.graphql_errors(operation, messages)
        if payload.data is None:
            log_error(logger, "GitHub GraphQL response for %s has no data", operation)
            raise GitHubResponseShapeError.missing(operation, "data")
        return payload.data

    async def resolve_node_id(self, resource_url: str) -> str:
        """Return the GraphQL node id of the issue or pull request at ``resource_url``.

        Raises
        ------
        GitHubUpstreamError
            If the URL cannot be mapped, the request fails, or the body has
            no ``node_id``.

        """
        endpoint = api_url_for(resource_url, self._config.api_url)
        response = await self._send(
            _RESOLVE_OPERATION,
            "GET",
            endpoint,
            headers={"Accept": _REST_ACCEPT},
        )
        resource = self._decode(_RESOLVE_OPERATION, response, ResourceNode)
        if not resource.node_id:
            log_error(logger, "No node_id in response from %s", endpoint)
            raise GitHubResponseShapeError.missing(_RESOLVE_OPERATION, "node_id")
        log_info(logger, "Resolved %s to node %s", resource_url, resource.node_id)
        return resource.node_id
