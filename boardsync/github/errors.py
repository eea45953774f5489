"""Errors raised by outbound GitHub calls.

Every failure talking to GitHub derives from :class:`GitHubUpstreamError`
so the HTTP layer can answer ``502 Bad Gateway`` with a single handler.
"""

from __future__ import annotations


class GitHubUpstreamError(RuntimeError):
    """Base class for failed or unusable GitHub responses.

    Attributes
    ----------
    operation
        Name of the outbound call that failed, for log context.

    """

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        """Initialise with a message and the failing operation name."""
        self.operation = operation
        super().__init__(message)


class GitHubTransportError(GitHubUpstreamError):
    """Raised when a request to GitHub never produced a response."""

    @classmethod
    def request_failed(cls, operation: str, exc: BaseException) -> GitHubTransportError:
        """Return an error wrapping an httpx transport failure."""
        return cls(
            f"GitHub request for {operation} failed: {exc.__class__.__name__}: {exc}",
            operation=operation,
        )


class GitHubAPIError(GitHubUpstreamError):
    """Raised when GitHub returns an error response."""

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message, operation=operation)

    @classmethod
    def http_error(cls, operation: str, status_code: int) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"GitHub HTTP {status_code} during {operation}",
            operation=operation,
            status_code=status_code,
        )

    @classmethod
    def graphql_errors(cls, operation: str, errors: object) -> GitHubAPIError:
        """Return an error for GraphQL ``errors`` payloads."""
        return cls(f"GitHub GraphQL errors during {operation}: {errors}", operation=operation)

    @classmethod
    def unresolvable_url(cls, url: str) -> GitHubAPIError:
        """Return an error for a resource URL with no API counterpart."""
        return cls(
            f"Cannot derive an API endpoint from resource URL {url!r}",
            operation="resolve node id",
        )


class GitHubResponseShapeError(GitHubUpstreamError):
    """Raised when a GitHub response lacks an expected field."""

    @classmethod
    def missing(cls, operation: str, field: str) -> GitHubResponseShapeError:
        """Return an error for a missing response field."""
        return cls(
            f"GitHub response for {operation} missing expected field: {field}",
            operation=operation,
        )

    @classmethod
    def undecodable(cls, operation: str, detail: str) -> GitHubResponseShapeError:
        """Return an error for a body that does not match the expected shape."""
        return cls(
            f"GitHub response for {operation} could not be decoded: {detail}",
            operation=operation,
        )


class StatusFieldMismatchError(GitHubResponseShapeError):
    """Raised when the board's status field or option cannot be found.

    This signals drift between the labels this service writes and the
    board's actual configuration rather than a transient failure.
    """

    @classmethod
    def field_missing(cls, field_name: str) -> StatusFieldMismatchError:
        """Return an error for a board without the named single-select field."""
        return cls(
            f"Project has no single-select field named {field_name!r}",
            operation="fetch project fields",
        )

    @classmethod
    def option_missing(cls, field_name: str, label: str) -> StatusFieldMismatchError:
        """Return an error for a status field lacking the requested option."""
        return cls(
            f"Project field {field_name!r} has no option named {label!r}",
            operation="fetch project fields",
        )
