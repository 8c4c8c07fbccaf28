"""
Value objects built from gateway payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .errors import GatewayError, InvalidInputError

__all__ = [
    "BUSINESS_ACCOUNT_TYPE",
    "Account",
    "Payway",
    "Purse",
    "WithdrawalRequest",
    "WithdrawalResult",
    "iter_entries",
    "to_decimal",
]

BUSINESS_ACCOUNT_TYPE = "b"


def iter_entries(payload: Any) -> Iterator[Mapping[str, Any]]:
    """
    Iterate the items of a gateway list payload.

    The API returns collections either as a JSON array or as an object keyed
    by id; both are walked in payload order.
    """
    if payload is None:
        return
    items = payload.values() if isinstance(payload, Mapping) else payload
    for item in items:
        if isinstance(item, Mapping):
            yield item


def to_decimal(value: Any, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidInputError(f"{field_name} must be a valid decimal number, got '{value}'") from exc
    if not amount.is_finite():
        raise InvalidInputError(f"{field_name} must be a finite number, got '{value}'")
    return amount


@dataclass(frozen=True)
class Account:
    id: str
    type: str

    @property
    def is_business(self) -> bool:
        return self.type == BUSINESS_ACCOUNT_TYPE

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Account":
        return cls(id=str(payload.get("_id", "")), type=str(payload.get("tp", "")))


@dataclass(frozen=True)
class Purse:
    id: str
    name: str
    balance: Decimal

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Purse":
        try:
            balance = to_decimal(payload.get("balance", "0"), "balance")
        except InvalidInputError as exc:
            raise GatewayError(f"Malformed purse payload: {exc}") from exc
        return cls(
            id=str(payload.get("id", "")),
            name=str(payload.get("name", "")),
            balance=balance,
        )


@dataclass(frozen=True)
class Payway:
    id: str
    alias: str
    required_detail_keys: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Payway":
        prm = payload.get("prm") or ()
        keys = prm.keys() if isinstance(prm, Mapping) else prm
        return cls(
            id=str(payload.get("id", "")),
            alias=str(payload.get("als", "")),
            required_detail_keys=tuple(str(key) for key in keys),
        )


@dataclass(frozen=True)
class WithdrawalRequest:
    amount: Decimal
    payway_id: str
    details: Mapping[str, Any]
    purse_id: str
    payment_no: str
    calc_key: str = "ikPayerPrice"
    action: str = "calc"

    def as_form(self) -> Dict[str, Any]:
        return {
            "amount": str(self.amount),
            "paywayId": self.payway_id,
            "details": dict(self.details),
            "purseId": self.purse_id,
            "calcKey": self.calc_key,
            "action": self.action,
            "paymentNo": self.payment_no,
        }


@dataclass(frozen=True)
class WithdrawalResult:
    result_code: int
    result_message: str
    transaction: Any
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.result_code == 0

    @classmethod
    def from_response(cls, payload: Optional[Mapping[str, Any]]) -> "WithdrawalResult":
        data = dict(payload or {})
        raw_code = data.get("@resultCode")
        try:
            result_code = int(raw_code)
        except (TypeError, ValueError) as exc:
            raise GatewayError(f"Malformed withdraw result code: {raw_code!r}") from exc
        return cls(
            result_code=result_code,
            result_message=str(data.get("@resultMessage", "")),
            transaction=data.get("transaction"),
            raw=data,
        )
