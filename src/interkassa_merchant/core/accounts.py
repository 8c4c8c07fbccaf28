"""
Lazy resolution of the business account id used to scope API calls.
"""

from __future__ import annotations

import logging
from typing import Optional

from .cache import ACCOUNT_ID_KEY, CACHE_TTL_SECONDS, CacheBackend
from .client import ApiClient
from .errors import ConfigurationError
from .models import Account, iter_entries

__all__ = ["AccountResolver"]


class AccountResolver:
    def __init__(self, api: ApiClient, cache: Optional[CacheBackend] = None) -> None:
        self.api = api
        self.cache = cache if cache is not None else api.cache

    def resolve_business_account_id(self) -> str:
        """
        Return the id of the first business-type account, cached for a day.
        """
        cached = self.cache.get(ACCOUNT_ID_KEY)
        if cached is not None:
            return cached

        logging.info("Resolving business account id from the account list")
        account_id = None
        for entry in iter_entries(self.api.get_accounts()):
            account = Account.from_payload(entry)
            if account.is_business and account.id:
                account_id = account.id
                break

        if account_id is None:
            raise ConfigurationError("business account not found")

        self.cache.set(ACCOUNT_ID_KEY, account_id, CACHE_TTL_SECONDS)
        return account_id
