"""Tests for configuration loading and secret selection."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from interkassa_merchant import (
    ConfigurationError,
    MerchantConfig,
    build_environment,
    load_env_file,
    load_merchant_config,
)
from interkassa_merchant.core.config import DEFAULT_API_URL, DEFAULT_SCI_URL

OPTIONS = {
    "co_id": "co-1",
    "secret_key": "live",
    "test_key": "test",
    "api_user_id": "uid",
    "api_user_key": "ukey",
}


class TestSigningKey:
    """The dev flag picks exactly one secret."""

    def test_dev_uses_test_key(self, config: MerchantConfig) -> None:
        """dev=True signs with the test key."""
        dev_config = replace(config, dev=True)

        assert dev_config.signing_key == "test-secret"

    def test_live_uses_secret_key(self, config: MerchantConfig) -> None:
        """dev=False signs with the live key."""
        assert config.dev is False
        assert config.signing_key == "live-secret"

    def test_repr_hides_secrets(self, config: MerchantConfig) -> None:
        """Keys never leak through repr."""
        text = repr(config)

        assert "live-secret" not in text
        assert "test-secret" not in text
        assert "key-1" not in text


class TestFromOptions:
    """Building a config from option names."""

    def test_defaults(self) -> None:
        """Optional settings fall back to their defaults."""
        cfg = MerchantConfig.from_options(OPTIONS)

        assert cfg.sign_algo == "md5"
        assert cfg.dev is False
        assert cfg.sci_url == DEFAULT_SCI_URL
        assert cfg.api_url == DEFAULT_API_URL
        assert cfg.timeout_seconds == 30

    def test_dev_flag_from_bool(self) -> None:
        """A boolean dev option is honoured."""
        assert MerchantConfig.from_options({**OPTIONS, "dev": True}).dev is True

    def test_missing_required_option(self) -> None:
        """Missing credentials are reported by their environment key."""
        options = dict(OPTIONS)
        del options["api_user_key"]

        with pytest.raises(ConfigurationError, match="INTERKASSA_API_USER_KEY"):
            MerchantConfig.from_options(options)

    def test_unknown_option(self) -> None:
        """Typos in option names are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown merchant option"):
            MerchantConfig.from_options({**OPTIONS, "co_idd": "x"})

    def test_unsupported_algorithm(self) -> None:
        """The signature algorithm must be known to hashlib."""
        with pytest.raises(ConfigurationError, match="Unsupported signature algorithm"):
            MerchantConfig.from_options({**OPTIONS, "sign_algo": "rot13"})

    def test_api_url_gets_trailing_slash(self) -> None:
        """Endpoint paths are appended directly, so the base ends with a slash."""
        cfg = MerchantConfig.from_options({**OPTIONS, "api_url": "https://api.example.com/v1"})

        assert cfg.api_url == "https://api.example.com/v1/"

    def test_invalid_dev_flag(self) -> None:
        """Unrecognised flag values are rejected."""
        with pytest.raises(ConfigurationError, match="INTERKASSA_DEV"):
            MerchantConfig.from_options({**OPTIONS, "dev": "maybe"})


class TestLoadMerchantConfig:
    """Layering of environment, .env file and keyword options."""

    def test_env_file_fills_missing_keys(self, tmp_path: Path) -> None:
        """Values from the .env file are used when the base lacks them."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# merchant\n"
            "INTERKASSA_CO_ID=file-co\n"
            "INTERKASSA_SECRET_KEY='file-live'\n"
            "export INTERKASSA_TEST_KEY=file-test\n"
            "INTERKASSA_DEV=1\n",
            encoding="utf-8",
        )
        base = {"INTERKASSA_API_USER_ID": "uid", "INTERKASSA_API_USER_KEY": "ukey"}

        cfg = load_merchant_config(env_file=str(env_file), base=base)

        assert cfg.co_id == "file-co"
        assert cfg.secret_key == "file-live"
        assert cfg.test_key == "file-test"
        assert cfg.dev is True

    def test_base_wins_over_env_file(self, tmp_path: Path) -> None:
        """Existing variables are not overwritten by the .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("INTERKASSA_CO_ID=file-co\n", encoding="utf-8")
        base = {
            "INTERKASSA_CO_ID": "env-co",
            "INTERKASSA_SECRET_KEY": "live",
            "INTERKASSA_TEST_KEY": "test",
            "INTERKASSA_API_USER_ID": "uid",
            "INTERKASSA_API_USER_KEY": "ukey",
        }

        assert load_merchant_config(env_file=str(env_file), base=base).co_id == "env-co"

    def test_keyword_options_win(self) -> None:
        """Explicit options override overrides and base values."""
        base = {f"INTERKASSA_{key.upper()}": value for key, value in OPTIONS.items()}

        cfg = load_merchant_config(
            env_file=None,
            base=base,
            overrides={"INTERKASSA_CO_ID": "override-co"},
            co_id="kw-co",
        )

        assert cfg.co_id == "kw-co"

    def test_missing_env_file_is_ignored(self, tmp_path: Path) -> None:
        """A missing .env file is not an error."""
        cfg = load_merchant_config(env_file=str(tmp_path / "absent.env"), base={}, **OPTIONS)

        assert cfg.co_id == "co-1"


class TestEnvironment:
    """Environment layering helpers."""

    def test_overrides_win(self, tmp_path: Path) -> None:
        """Overrides beat both the base mapping and the .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text('A="from-file"\nB=from-file\n', encoding="utf-8")

        environment = build_environment(
            env_file=str(env_file), base={"A": "from-base"}, overrides={"C": "override"}
        )

        assert environment.get("A") == "from-base"
        assert environment.get("B") == "from-file"
        assert environment.get("C") == "override"
        assert environment.get("D", "fallback") == "fallback"

    def test_load_env_file_preserves_existing(self, tmp_path: Path) -> None:
        """Loading a file only fills keys that are not already set."""
        env_file = tmp_path / ".env"
        env_file.write_text("A=new\nB=new\n", encoding="utf-8")
        environ = {"A": "old"}

        merged = load_env_file(str(env_file), environ=environ)

        assert merged == {"A": "old", "B": "new"}
        assert environ["B"] == "new"
