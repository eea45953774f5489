"""boardsync HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application serving the health probe and the GitHub webhook
receiver.

Usage
-----
Create the application::

    from boardsync.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # with the webhook receiver

"""

from boardsync.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
