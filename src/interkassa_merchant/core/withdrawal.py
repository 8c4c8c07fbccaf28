"""
Withdrawal flow: resolve purse, check balance, resolve payway, submit, interpret.
"""

from __future__ import annotations

import enum
import logging
from decimal import Decimal
from typing import Any, Mapping, Protocol

from .errors import (
    GatewayError,
    InsufficientBalanceError,
    InterkassaError,
    InvalidInputError,
    NotFoundError,
)
from .models import Payway, Purse, WithdrawalRequest, WithdrawalResult, iter_entries, to_decimal

__all__ = [
    "WithdrawalGateway",
    "WithdrawalOrchestrator",
    "WithdrawalStage",
]


class WithdrawalStage(str, enum.Enum):
    START = "start"
    PURSE_RESOLVED = "purse_resolved"
    BALANCE_CHECKED = "balance_checked"
    PAYWAY_RESOLVED = "payway_resolved"
    SUBMITTED = "submitted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _advance(payment_id: Any, stage: WithdrawalStage) -> WithdrawalStage:
    logging.debug("Withdrawal %s reached %s", payment_id, stage.value)
    return stage


class WithdrawalGateway(Protocol):
    def get_purses(self) -> Any:
        ...

    def get_output_payways(self) -> Any:
        ...

    def create_withdraw(self, request: WithdrawalRequest) -> Any:
        ...


class WithdrawalOrchestrator:
    """
    Runs one withdrawal end to end.

    Steps run strictly in order and the first failing precondition ends the
    flow; the raised error's ``stage`` is the last stage reached.
    """

    def __init__(self, gateway: WithdrawalGateway) -> None:
        self.gateway = gateway

    def find_purse(self, purse_name: str) -> Purse:
        for entry in iter_entries(self.gateway.get_purses()):
            purse = Purse.from_payload(entry)
            if purse.name == purse_name:
                return purse
        raise NotFoundError("purse", purse_name)

    def find_payway(self, payway_alias: str) -> Payway:
        for entry in iter_entries(self.gateway.get_output_payways()):
            payway = Payway.from_payload(entry)
            if payway.alias == payway_alias:
                return payway
        raise NotFoundError("payway", payway_alias)

    def withdraw(
        self,
        payment_id: Any,
        purse_name: str,
        payway_alias: str,
        details: Mapping[str, Any],
        amount: Decimal | str | float | int,
        calc_key: str = "ikPayerPrice",
        action: str = "calc",
    ) -> Any:
        stage = WithdrawalStage.START
        try:
            value = to_decimal(amount, "amount")
            if value <= 0:
                raise InvalidInputError("amount must be greater than zero")

            purse = self.find_purse(purse_name)
            stage = _advance(payment_id, WithdrawalStage.PURSE_RESOLVED)

            if purse.balance < value:
                raise InsufficientBalanceError(purse.balance, value)
            stage = _advance(payment_id, WithdrawalStage.BALANCE_CHECKED)

            payway = self.find_payway(payway_alias)
            stage = _advance(payment_id, WithdrawalStage.PAYWAY_RESOLVED)

            request = WithdrawalRequest(
                amount=value,
                payway_id=payway.id,
                details=details,
                purse_id=purse.id,
                payment_no=str(payment_id),
                calc_key=calc_key,
                action=action,
            )
            logging.info(
                "Submitting withdrawal %s of %s from purse %s via payway %s",
                request.payment_no,
                value,
                purse.id,
                payway.alias,
            )
            # Submission and result interpretation fail alike as http exceptions.
            try:
                raw = self.gateway.create_withdraw(request)
                stage = _advance(payment_id, WithdrawalStage.SUBMITTED)

                result = WithdrawalResult.from_response(raw)
                if not result.success:
                    raise GatewayError(result.result_message, code=result.result_code)
            except GatewayError as exc:
                raise GatewayError(
                    f"http exception: {exc.message}",
                    status_code=exc.status_code,
                    code=exc.code,
                ) from exc
        except InterkassaError as exc:
            exc.stage = stage
            logging.warning(
                "Withdrawal %s %s after %s: %s",
                payment_id,
                WithdrawalStage.FAILED.value,
                stage.value,
                exc.message,
            )
            raise

        logging.info("Withdrawal %s %s", payment_id, WithdrawalStage.SUCCEEDED.value)
        return result.transaction
