"""
Helpers for constructing the redirect query and API form bodies.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

import requests

from .config import MerchantConfig
from .errors import InvalidInputError
from .signature import SIGNED_PREFIX

__all__ = [
    "build_payment_params",
    "build_payment_url",
    "flatten_form",
]


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _flatten(prefix: str, value: Any, out: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, out)
    else:
        out.append((prefix, _scalar(value)))


def flatten_form(data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """
    Flatten nested mappings and sequences into bracketed form fields.

    ``{"details": {"card": "4111"}}`` becomes ``[("details[card]", "4111")]``;
    ``None`` values are dropped.
    """
    fields: List[Tuple[str, str]] = []
    for key, value in data.items():
        _flatten(str(key), value, fields)
    return fields


def build_payment_params(config: MerchantConfig, params: Mapping[str, Any]) -> Dict[str, str]:
    """
    Select the ``ik_`` parameters of a checkout and stamp the checkout id.

    Typical callers pass ``ik_pm_no`` (payment id), ``ik_am`` (amount) and
    ``ik_desc`` (description). An ``ik_sign`` supplied by the caller is kept.
    Values are rendered exactly as they travel in the query string, so a
    signature computed over the result matches what the gateway receives.
    """
    if not isinstance(params, Mapping):
        raise InvalidInputError("Payment params must be a mapping")

    selected = {
        str(key): value
        for key, value in params.items()
        if str(key).startswith(SIGNED_PREFIX)
    }
    selected["ik_co_id"] = config.co_id
    return dict(flatten_form(selected))


def build_payment_url(config: MerchantConfig, params: Mapping[str, Any]) -> str:
    prepared = requests.PreparedRequest()
    prepared.prepare_url(config.sci_url, list(build_payment_params(config, params).items()))
    return prepared.url
