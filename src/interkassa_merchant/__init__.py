"""
Public facade for the Interkassa merchant package.

The most useful pieces are re-exported so integrators can
``from interkassa_merchant import ...`` without navigating the package.
"""

from .api import create_merchant_client, withdraw
from .core import (
    AccountResolver,
    ApiClient,
    CacheBackend,
    ConfigurationError,
    ErrorKind,
    GatewayError,
    InMemoryCache,
    InsufficientBalanceError,
    InterkassaError,
    InvalidInputError,
    MerchantClient,
    MerchantConfig,
    NotFoundError,
    Payway,
    Purse,
    WithdrawalOrchestrator,
    WithdrawalRequest,
    WithdrawalResult,
    WithdrawalStage,
    build_environment,
    generate_sign,
    load_env_file,
    load_merchant_config,
    verify_sign,
)

__all__ = (
    "AccountResolver",
    "ApiClient",
    "CacheBackend",
    "ConfigurationError",
    "ErrorKind",
    "GatewayError",
    "InMemoryCache",
    "InsufficientBalanceError",
    "InterkassaError",
    "InvalidInputError",
    "MerchantClient",
    "MerchantConfig",
    "NotFoundError",
    "Payway",
    "Purse",
    "WithdrawalOrchestrator",
    "WithdrawalRequest",
    "WithdrawalResult",
    "WithdrawalStage",
    "build_environment",
    "create_merchant_client",
    "generate_sign",
    "load_env_file",
    "load_merchant_config",
    "verify_sign",
    "withdraw",
)
