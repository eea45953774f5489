"""Health probe resource.

Usage
-----
Import the resource for route registration::

    from boardsync.api.health.resources import HealthResource
"""
