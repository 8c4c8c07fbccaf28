"""
Signing of Interkassa checkout parameters.

Only ``ik_``-prefixed parameters take part in the signature, ``ik_sign``
excluded. Values are ordered by key (then by value), the secret is appended,
everything is joined with ``:``, hashed, and the raw digest is base64-encoded.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Any, List, Mapping, Tuple

from .errors import ConfigurationError

__all__ = [
    "SIGNATURE_FIELD",
    "SIGNED_PREFIX",
    "generate_sign",
    "signing_values",
    "verify_sign",
]

SIGNED_PREFIX = "ik_"
SIGNATURE_FIELD = "ik_sign"


def _signed_pairs(params: Mapping[str, Any]) -> List[Tuple[str, str]]:
    return [
        (str(key), str(value))
        for key, value in params.items()
        if str(key).startswith(SIGNED_PREFIX) and key != SIGNATURE_FIELD
    ]


def signing_values(params: Mapping[str, Any], secret: str) -> List[str]:
    """Return the ordered values that are joined to form the signing input."""
    # Tuple ordering compares the value only when keys are equal.
    ordered = sorted(_signed_pairs(params))
    values = [value for _, value in ordered]
    values.append(secret)
    return values


def generate_sign(
    params: Mapping[str, Any],
    secret: str,
    algorithm: str = "md5",
) -> str:
    try:
        digest = hashlib.new(algorithm)
    except ValueError as exc:
        raise ConfigurationError(f"Unsupported signature algorithm '{algorithm}'") from exc

    digest.update(":".join(signing_values(params, secret)).encode("utf-8"))
    return base64.b64encode(digest.digest()).decode("ascii")


def verify_sign(
    params: Mapping[str, Any],
    secret: str,
    algorithm: str = "md5",
) -> bool:
    """
    Check the ``ik_sign`` of an inbound notification against ``secret``.
    """
    received = params.get(SIGNATURE_FIELD)
    if not received:
        return False
    expected = generate_sign(params, secret, algorithm)
    return hmac.compare_digest(expected.encode("ascii"), str(received).encode("ascii", "replace"))
