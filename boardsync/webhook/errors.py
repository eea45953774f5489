"""Errors raised while accepting an inbound webhook delivery."""

from __future__ import annotations


class WebhookIntakeError(Exception):
    """Base class for deliveries rejected before any outbound call."""


class SignatureVerificationError(WebhookIntakeError):
    """Raised when a delivery's ``X-Hub-Signature-256`` does not verify.

    Attributes
    ----------
    reason
        Short, secret-free description of why verification failed.

    """

    def __init__(self, reason: str) -> None:
        """Initialise with the failure reason."""
        self.reason = reason
        super().__init__(f"Webhook signature rejected: {reason}")

    @classmethod
    def missing_header(cls) -> SignatureVerificationError:
        """Return an error for a delivery without a signature header."""
        return cls("missing signature header")

    @classmethod
    def malformed_header(cls) -> SignatureVerificationError:
        """Return an error for a header without the ``sha256=`` prefix."""
        return cls("malformed signature header")

    @classmethod
    def mismatch(cls) -> SignatureVerificationError:
        """Return an error for a digest that does not match the body."""
        return cls("signature mismatch")


class MalformedPayloadError(WebhookIntakeError):
    """Raised when a verified body cannot be interpreted as the claimed event.

    Attributes
    ----------
    reason
        Human-readable description of the structural problem.

    """

    def __init__(self, reason: str) -> None:
        """Initialise with the structural problem description."""
        self.reason = reason
        super().__init__(reason)

    @classmethod
    def undecodable(cls, detail: str) -> MalformedPayloadError:
        """Return an error for a body that is not a valid event envelope."""
        return cls(f"payload could not be decoded: {detail}")

    @classmethod
    def missing_resource(cls, event_type: str, field: str) -> MalformedPayloadError:
        """Return an error for an event lacking its resource sub-object."""
        return cls(f"{event_type} event is missing the {field!r} object")

    @classmethod
    def missing_url(cls, event_type: str) -> MalformedPayloadError:
        """Return an error for a resource without an ``html_url``."""
        return cls(f"{event_type} event resource has no html_url")
