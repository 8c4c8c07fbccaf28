"""
Configuration objects and helpers for the Interkassa merchant client.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ConfigurationError

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_SCI_URL",
    "MerchantConfig",
    "load_merchant_config",
]

DEFAULT_SCI_URL = "https://sci.interkassa.com/"
DEFAULT_API_URL = "https://api.interkassa.com/v1/"

_OPTION_TO_ENV_KEY = {
    "co_id": "INTERKASSA_CO_ID",
    "secret_key": "INTERKASSA_SECRET_KEY",
    "test_key": "INTERKASSA_TEST_KEY",
    "sign_algo": "INTERKASSA_SIGN_ALGO",
    "api_user_id": "INTERKASSA_API_USER_ID",
    "api_user_key": "INTERKASSA_API_USER_KEY",
    "dev": "INTERKASSA_DEV",
    "sci_url": "INTERKASSA_SCI_URL",
    "api_url": "INTERKASSA_API_URL",
    "timeout_seconds": "INTERKASSA_TIMEOUT_SECONDS",
}

_TRUE_VALUES = {"1", "true", "yes", "on", "dev"}
_FALSE_VALUES = {"", "0", "false", "no", "off", "live", "prod"}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_flag(raw: str, field_name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{field_name} must be a boolean flag, got '{raw}'")


def _require(values: Mapping[str, str], env_key: str) -> str:
    value = values.get(env_key, "").strip()
    if not value:
        raise ConfigurationError(f"{env_key} must be provided")
    return value


def _normalize_url(raw: str, field_name: str) -> str:
    value = raw.strip()
    if not value.startswith(("http://", "https://")):
        raise ConfigurationError(f"{field_name} must be an http(s) URL")
    if not value.endswith("/"):
        value += "/"
    return value


def _normalize_algorithm(raw: str) -> str:
    algorithm = raw.strip().lower()
    if algorithm not in hashlib.algorithms_available:
        raise ConfigurationError(f"Unsupported signature algorithm '{raw}'")
    return algorithm


@dataclass(frozen=True)
class MerchantConfig:
    co_id: str
    secret_key: str
    test_key: str
    api_user_id: str
    api_user_key: str
    sign_algo: str = "md5"
    dev: bool = False
    sci_url: str = DEFAULT_SCI_URL
    api_url: str = DEFAULT_API_URL
    timeout_seconds: int = 30

    @property
    def signing_key(self) -> str:
        """The test key in dev mode, the live secret key otherwise."""
        return self.test_key if self.dev else self.secret_key

    def __repr__(self) -> str:
        return (
            f"MerchantConfig(co_id={self.co_id!r}, api_user_id={self.api_user_id!r}, "
            f"sign_algo={self.sign_algo!r}, dev={self.dev!r}, api_url={self.api_url!r})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "MerchantConfig":
        co_id = _require(values, "INTERKASSA_CO_ID")
        secret_key = _require(values, "INTERKASSA_SECRET_KEY")
        test_key = _require(values, "INTERKASSA_TEST_KEY")
        api_user_id = _require(values, "INTERKASSA_API_USER_ID")
        api_user_key = _require(values, "INTERKASSA_API_USER_KEY")

        sign_algo = _normalize_algorithm(values.get("INTERKASSA_SIGN_ALGO") or "md5")
        dev = _parse_flag(values.get("INTERKASSA_DEV", ""), "INTERKASSA_DEV")

        sci_url = _normalize_url(
            values.get("INTERKASSA_SCI_URL", DEFAULT_SCI_URL), "INTERKASSA_SCI_URL"
        )
        api_url = _normalize_url(
            values.get("INTERKASSA_API_URL", DEFAULT_API_URL), "INTERKASSA_API_URL"
        )

        timeout_raw = values.get("INTERKASSA_TIMEOUT_SECONDS", "30")
        try:
            timeout_seconds = int(timeout_raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"INTERKASSA_TIMEOUT_SECONDS must be an integer, got '{timeout_raw}'"
            ) from exc
        if timeout_seconds <= 0:
            raise ConfigurationError("INTERKASSA_TIMEOUT_SECONDS must be greater than zero")

        return cls(
            co_id=co_id,
            secret_key=secret_key,
            test_key=test_key,
            api_user_id=api_user_id,
            api_user_key=api_user_key,
            sign_algo=sign_algo,
            dev=dev,
            sci_url=sci_url,
            api_url=api_url,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "MerchantConfig":
        """
        Build a config from option names (``co_id``, ``secret_key``, ...).

        Unknown option names raise :class:`ConfigurationError`.
        """
        return cls.from_mapping(_options_to_env(options))

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        **options: Any,
    ) -> "MerchantConfig":
        merged_overrides = dict(overrides or {})
        merged_overrides.update(_options_to_env(options))

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def _options_to_env(options: Mapping[str, Any]) -> Dict[str, str]:
    env: Dict[str, str] = {}
    for key, value in options.items():
        if value is None:
            continue
        try:
            env_key = _OPTION_TO_ENV_KEY[key]
        except KeyError as exc:
            raise ConfigurationError(f"Unknown merchant option '{key}'") from exc
        env[env_key] = _stringify(value)
    return env


def load_merchant_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    **options: Any,
) -> MerchantConfig:
    """
    Convenience wrapper that mirrors :meth:`MerchantConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, explicit
    keyword options, or any combination. Keyword options win.
    """
    return MerchantConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        **options,
    )
