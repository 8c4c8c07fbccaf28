"""
Core primitives for the Interkassa checkout and API integration.
"""

from .accounts import AccountResolver
from .cache import (
    ACCOUNT_ID_KEY,
    CACHE_TTL_SECONDS,
    CURRENCY_KEY,
    INPUT_PAYWAYS_KEY,
    OUTPUT_PAYWAYS_KEY,
    CacheBackend,
    InMemoryCache,
    read_through,
)
from .client import ACCOUNT_HEADER, ApiClient
from .config import MerchantConfig, load_merchant_config
from .environment import MerchantEnvironment, build_environment, load_env_file
from .errors import (
    ConfigurationError,
    ErrorKind,
    GatewayError,
    InsufficientBalanceError,
    InterkassaError,
    InvalidInputError,
    NotFoundError,
)
from .merchant import MerchantClient
from .models import Account, Payway, Purse, WithdrawalRequest, WithdrawalResult
from .payloads import build_payment_params, build_payment_url, flatten_form
from .signature import generate_sign, verify_sign
from .withdrawal import WithdrawalOrchestrator, WithdrawalStage

__all__ = [
    "ACCOUNT_HEADER",
    "ACCOUNT_ID_KEY",
    "CACHE_TTL_SECONDS",
    "CURRENCY_KEY",
    "INPUT_PAYWAYS_KEY",
    "OUTPUT_PAYWAYS_KEY",
    "Account",
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
    "MerchantEnvironment",
    "NotFoundError",
    "Payway",
    "Purse",
    "WithdrawalOrchestrator",
    "WithdrawalRequest",
    "WithdrawalResult",
    "WithdrawalStage",
    "build_environment",
    "build_payment_params",
    "build_payment_url",
    "flatten_form",
    "generate_sign",
    "load_env_file",
    "load_merchant_config",
    "read_through",
    "verify_sign",
]
