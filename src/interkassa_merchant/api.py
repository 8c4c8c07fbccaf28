"""
Public, high-level helpers for interacting with the Interkassa gateway.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

import requests

from .core.cache import CacheBackend
from .core.config import MerchantConfig, load_merchant_config
from .core.merchant import MerchantClient

__all__ = [
    "create_merchant_client",
    "withdraw",
]


def _resolve_config(
    config: Optional[MerchantConfig],
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    options: Mapping[str, Any],
) -> MerchantConfig:
    if config is not None:
        extras = (overrides, base, *options.values())
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built MerchantConfig or individual options, not both."
            )
        return config
    return load_merchant_config(
        env_file=env_file,
        overrides=overrides,
        base=base,
        **options,
    )


def create_merchant_client(
    *,
    config: Optional[MerchantConfig] = None,
    session: Optional[requests.Session] = None,
    cache: Optional[CacheBackend] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    **options: Any,
) -> MerchantClient:
    """
    Construct a :class:`MerchantClient`.

    Callers can either supply a ready-made :class:`MerchantConfig` or let the
    helper assemble one from environment data and keyword options
    (``co_id``, ``secret_key``, ``test_key``, ``sign_algo``, ``api_user_id``,
    ``api_user_key``, ``dev`` ...).
    """
    cfg = _resolve_config(config, env_file, overrides, base, options)
    return MerchantClient(cfg, session=session, cache=cache)


def withdraw(
    payment_id: Any,
    purse_name: str,
    payway_alias: str,
    details: Mapping[str, Any],
    amount: Decimal | str | float | int,
    *,
    calc_key: str = "ikPayerPrice",
    action: str = "calc",
    config: Optional[MerchantConfig] = None,
    session: Optional[requests.Session] = None,
    cache: Optional[CacheBackend] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    **options: Any,
) -> Any:
    """
    High-level helper that runs a single withdrawal and returns its transaction.
    """
    client = create_merchant_client(
        config=config,
        session=session,
        cache=cache,
        env_file=env_file,
        overrides=overrides,
        base=base,
        **options,
    )
    return client.withdraw(
        payment_id,
        purse_name,
        payway_alias,
        details,
        amount,
        calc_key=calc_key,
        action=action,
    )
