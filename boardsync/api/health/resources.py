"""Liveness probe resource.

The resource is stateless and needs no configuration, so it is always
registered, even when the app is built without a sync service.

Usage
-----
Register the endpoint on the Falcon app::

    from boardsync.api.health.resources import HealthResource

    app.add_route("/health", HealthResource())

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource"]


class HealthResource:
    """Liveness probe resource returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response populated with liveness status.

        """
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK
