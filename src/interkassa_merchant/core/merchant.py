"""
Merchant-facing facade over signing, the redirect URL and account-scoped endpoints.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

import requests

from .accounts import AccountResolver
from .cache import CacheBackend
from .client import ApiClient
from .config import MerchantConfig
from .models import WithdrawalRequest
from .payloads import build_payment_params, build_payment_url
from .signature import SIGNATURE_FIELD, generate_sign, verify_sign
from .withdrawal import WithdrawalOrchestrator

__all__ = ["MerchantClient"]


class MerchantClient:
    """
    Convenience wrapper around the checkout and API endpoints of one merchant.
    """

    def __init__(
        self,
        config: MerchantConfig,
        *,
        session: Optional[requests.Session] = None,
        cache: Optional[CacheBackend] = None,
    ) -> None:
        self.config = config
        self.api = ApiClient(config, session=session, cache=cache)
        self.accounts = AccountResolver(self.api)
        self.orchestrator = WithdrawalOrchestrator(self)

    def sign(self, params: Mapping[str, Any]) -> str:
        return generate_sign(params, self.config.signing_key, self.config.sign_algo)

    def verify_notification(self, params: Mapping[str, Any]) -> bool:
        """Check the signature of a payment notification sent by the gateway."""
        return verify_sign(params, self.config.signing_key, self.config.sign_algo)

    def payment_url(self, params: Mapping[str, Any]) -> str:
        """
        Build the checkout redirect URL.

        The URL is not signed here; pass params from
        :meth:`signed_payment_params` or add ``ik_sign`` beforehand.
        """
        return build_payment_url(self.config, params)

    def signed_payment_params(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        selected = build_payment_params(self.config, params)
        selected[SIGNATURE_FIELD] = self.sign(selected)
        return selected

    def business_account_id(self) -> str:
        return self.accounts.resolve_business_account_id()

    def _scoped(self, method: str, path: str, data: Optional[Mapping[str, Any]] = None) -> Any:
        return self.api.request(method, path, self.business_account_id(), data)

    def get_accounts(self) -> Any:
        return self.api.get_accounts()

    def get_checkouts(self) -> Any:
        """Cash registers of the account with their available input directions."""
        return self._scoped("GET", "checkout")

    def get_purses(self) -> Any:
        return self._scoped("GET", "purse")

    def get_co_invoices(self) -> Any:
        """Payments received by the checkout, including their ``state``."""
        return self._scoped("GET", "co-invoice")

    def get_withdraws(self) -> Any:
        return self._scoped("GET", "withdraw")

    def get_withdraw(self, withdraw_id: Any) -> Any:
        return self._scoped("GET", f"withdraw/{withdraw_id}")

    def create_withdraw(self, request: WithdrawalRequest) -> Any:
        return self._scoped("POST", "withdraw", request.as_form())

    def get_currencies(self) -> Any:
        return self.api.get_currencies()

    def get_input_payways(self) -> Any:
        return self.api.get_input_payways()

    def get_output_payways(self) -> Any:
        return self.api.get_output_payways()

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
        return self.orchestrator.withdraw(
            payment_id,
            purse_name,
            payway_alias,
            details,
            amount,
            calc_key=calc_key,
            action=action,
        )
