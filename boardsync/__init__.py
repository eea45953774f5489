"""Webhook bridge keeping a GitHub project board in step with issues and PRs."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
