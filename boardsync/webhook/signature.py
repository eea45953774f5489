"""HMAC-SHA256 verification of GitHub webhook signatures.

GitHub signs every delivery with the shared webhook secret and sends the
lowercase hex digest in ``X-Hub-Signature-256`` as ``sha256=<hex>``.

Example:
>>> import hashlib, hmac
>>> body = b'{"action": "opened"}'
>>> digest = hmac.new(b"s3cret", body, hashlib.sha256).hexdigest()
>>> verify("s3cret", body, f"sha256={digest}")
True
>>> verify("s3cret", body, "sha256=00")
False

"""

from __future__ import annotations

import hashlib
import hmac

from .errors import SignatureVerificationError

__all__ = [
    "SIGNATURE_PREFIX",
    "compute_signature",
    "constant_time_equals",
    "require_valid_signature",
    "verify",
]

SIGNATURE_PREFIX = "sha256="


def compute_signature(secret: str, body: bytes) -> str:
    """Return the lowercase hex HMAC-SHA256 of ``body`` keyed by ``secret``."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def constant_time_equals(left: bytes, right: bytes) -> bool:
    """Compare two byte strings without an early exit on the first difference.

    Lengths are public (the digest length is fixed) so a length mismatch is
    rejected immediately.  Equal-length inputs are folded with OR-of-XOR
    over every byte.
    """
    if len(left) != len(right):
        return False
    result = 0
    for x, y in zip(left, right, strict=True):
        result |= x ^ y
    return result == 0


def require_valid_signature(
    secret: str, body: bytes, presented: str | None
) -> None:
    """Raise unless ``presented`` is a valid ``sha256=`` signature of ``body``.

    Raises
    ------
    SignatureVerificationError
        If the header is absent, lacks the ``sha256=`` prefix, or does not
        match the computed digest.

    """
    if not presented:
        raise SignatureVerificationError.missing_header()
    if not presented.startswith(SIGNATURE_PREFIX):
        raise SignatureVerificationError.malformed_header()

    expected = compute_signature(secret, body).encode("ascii")
    candidate = presented[len(SIGNATURE_PREFIX) :].encode("utf-8")
    if not constant_time_equals(candidate, expected):
        raise SignatureVerificationError.mismatch()


def verify(secret: str, body: bytes, presented: str | None) -> bool:
    """Return whether ``presented`` is a valid signature of ``body``."""
    try:
        require_valid_signature(secret, body, presented)
    except SignatureVerificationError:
        return False
    return True
