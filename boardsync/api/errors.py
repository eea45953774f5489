"""Falcon error handlers translating domain exceptions into HTTP responses.

Usage
-----
Register the handlers on the Falcon app::

    from boardsync.api.errors import register_error_handlers

    register_error_handlers(app)

"""

from __future__ import annotations

import typing as typ

import falcon

from boardsync.github.errors import GitHubUpstreamError
from boardsync.webhook.errors import MalformedPayloadError, SignatureVerificationError

if typ.TYPE_CHECKING:
    from falcon.asgi import App, Request, Response

__all__ = [
    "handle_malformed_payload",
    "handle_signature_failure",
    "handle_upstream_failure",
    "register_error_handlers",
]


async def handle_signature_failure(
    _req: Request,
    resp: Response,
    ex: SignatureVerificationError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``SignatureVerificationError`` to an HTTP 401 JSON response.

    The description is the generic failure reason only; it never echoes
    the presented or expected digest.
    """
    resp.status = falcon.HTTP_401
    resp.media = {"title": "Unauthorized", "description": ex.reason}


async def handle_malformed_payload(
    _req: Request,
    resp: Response,
    ex: MalformedPayloadError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``MalformedPayloadError`` to an HTTP 400 JSON response."""
    resp.status = falcon.HTTP_400
    resp.media = {"title": "Malformed payload", "description": ex.reason}


async def handle_upstream_failure(
    _req: Request,
    resp: Response,
    ex: GitHubUpstreamError,
    _params: dict[str, typ.Any],
) -> None:
    """Map any ``GitHubUpstreamError`` to an HTTP 502 JSON response.

    Parameters
    ----------
    _req
        Falcon request (unused).
    resp
        Falcon response whose status and media are set.
    ex
        The upstream failure, including status-field mismatches.
    _params
        URI template parameters (unused).

    """
    resp.status = falcon.HTTP_502
    media: dict[str, str] = {"title": "Upstream failure", "description": str(ex)}
    if ex.operation is not None:
        media["operation"] = ex.operation
    resp.media = media


def register_error_handlers(app: App) -> None:
    """Install every boardsync error handler on ``app``."""
    app.add_error_handler(SignatureVerificationError, handle_signature_failure)
    app.add_error_handler(MalformedPayloadError, handle_malformed_payload)
    app.add_error_handler(GitHubUpstreamError, handle_upstream_failure)
