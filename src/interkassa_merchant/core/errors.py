"""
Error taxonomy for the Interkassa integration.

Every error carries an :class:`ErrorKind` so callers can branch on
``exc.kind`` instead of matching on exception classes.
"""

from __future__ import annotations

import enum
from decimal import Decimal
from typing import Any, Optional

__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "GatewayError",
    "InsufficientBalanceError",
    "InterkassaError",
    "InvalidInputError",
    "NotFoundError",
]


class ErrorKind(str, enum.Enum):
    CONFIGURATION = "configuration"
    NOT_FOUND = "not_found"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    GATEWAY = "gateway"
    INVALID_INPUT = "invalid_input"


class InterkassaError(Exception):
    """Base class for all errors raised by the package."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        # Last withdrawal stage reached, set by the orchestrator.
        self.stage: Optional[Any] = None


class ConfigurationError(InterkassaError):
    """Raised when settings are invalid or the gateway account is misconfigured."""

    kind = ErrorKind.CONFIGURATION


class InvalidInputError(InterkassaError):
    """Raised when caller-supplied parameters are malformed."""

    kind = ErrorKind.INVALID_INPUT


class NotFoundError(InterkassaError):
    """Raised when a purse or payway cannot be found by name."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, lookup: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.lookup = lookup


class InsufficientBalanceError(InterkassaError):
    kind = ErrorKind.INSUFFICIENT_BALANCE

    def __init__(self, balance: Decimal, amount: Decimal) -> None:
        super().__init__(
            f"Balance in purse ({balance}) is less than withdraw amount ({amount})"
        )
        self.balance = balance
        self.amount = amount


class GatewayError(InterkassaError):
    """
    Raised when the gateway rejects a call or the transport fails.

    ``status_code`` is the HTTP status when a response was received and
    ``code`` is the gateway's own response or result code when known.
    """

    kind = ErrorKind.GATEWAY

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
