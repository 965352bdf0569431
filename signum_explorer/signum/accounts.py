"""Account, block, network and asset queries against Signum nodes."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, TypeVar

from .base import SignumApiError, TtlCache
from .models import (
    MINIMUM_FEE,
    Account,
    AccountBlocks,
    Asset,
    ATDetails,
    Block,
    BlockchainStatus,
    DistributionAmount,
    MiningInfo,
    RequestType,
    SuggestFee,
)

logger = logging.getLogger(__name__)

MAX_ACCOUNT_BLOCKS = 10

# Accounts that receive many transactions; their names are looked up in advance.
BIG_WALLET_NAMES: dict[str, str] = {
    "13729039893708541600": "signa.foxypool.io",
    "15587859947385731145": "POOL.SIGNUMCOIN.ROᶜˡᵒᵘᵈᶠˡᵃʳᵉ ᴾʳᵒᵗᵉᶜᵗᵉᵈ",
    "357805355326612814": "VoipLanParty.com POOL",
    "12929948943098835191": "Pool",
    "14269239617439992230": "signumpool.de:8080",
    "16556991818216798777": "signumpool.com",
    "11055356809051900004": "SIGNApool.notallmine.net",
    "10737972901325069132": "fomplopool.com",
    "11986399960081949002": "signum.space",
    "5535056686655795026": "signum.land",
    "13383190289605706987": "Bittrex",
    "5346619515173992638": "",
    "13736966403016142704": "Signum Activation Account",
}

_BLOCKCHAIN_STATUS_KEY = "blockchain_status"
_SUGGEST_FEE_KEY = "suggest_fee"

T = TypeVar("T")


class AccountsMixin:
    """Queries for accounts, blocks, mining figures, fees and assets.

    Meant to be combined with ``SignumClientBase``, which supplies ``request``
    and the caches used here.
    """

    last_index: int
    account_cache: TtlCache[Any]
    blocks_cache: TtlCache[Any]
    blockchain_status_cache: TtlCache[Any]
    suggest_fee_cache: TtlCache[Any]
    big_wallet_names: dict[str, str]
    names_lock: threading.Lock
    request: Callable[[str, Mapping[str, str]], Any]

    def _fetch(
        self, http_method: str, params: Mapping[str, str], parse: Callable[[Any], T]
    ) -> T:
        data = self.request(http_method, params)
        try:
            return parse(data)
        except ValueError as exc:
            raise SignumApiError(
                f"couldn't decode {params.get('requestType')} answer: {exc}"
            ) from exc

    def get_account(self, account: str) -> Account:
        """Fetch an account and cache it under both its numeric id and address."""
        result = self._fetch(
            "GET",
            {
                "requestType": RequestType.GET_ACCOUNT.value,
                "getCommittedAmount": "true",
                "account": account,
            },
            Account.from_json,
        )
        self.account_cache.put(result.account, result)
        self.account_cache.put(result.account_rs, result)
        return result

    def get_account_id(self, secret_phrase: str) -> Account:
        """Ask a node which account belongs to ``secret_phrase``."""
        return self._fetch(
            "POST",
            {"requestType": RequestType.GET_ACCOUNT_ID.value, "secretPhrase": secret_phrase},
            Account.from_json,
        )

    def get_cached_account(self, account: str) -> Account:
        cached = self.account_cache.get(account)
        if cached is not None:
            return cached
        return self.get_account(account)

    def invalidate_account(self, account: str) -> None:
        self.account_cache.invalidate(account)

    def preload_names_for_big_wallets(self) -> None:
        """Look up the names of well known accounts, keeping defaults on failure."""
        for account, default_name in BIG_WALLET_NAMES.items():
            try:
                name = self.get_account(account).name
            except SignumApiError as exc:
                logger.warning("Couldn't preload name of %s: %s", account, exc)
                name = default_name
            with self.names_lock:
                self.big_wallet_names[account] = name

    def get_cached_account_name(self, account: str) -> str:
        """The account's name, or an empty string if it cannot be found."""
        with self.names_lock:
            name = self.big_wallet_names.get(account)
        if name is not None:
            return name
        cached = self.account_cache.get(account)
        if cached is not None:
            return cached.name
        try:
            return self.get_account(account).name
        except SignumApiError:
            return ""

    def get_account_blocks(self, account: str) -> AccountBlocks:
        """Fetch the latest blocks forged by ``account`` (at most ten)."""
        result = self._fetch(
            "GET",
            {
                "account": account,
                "requestType": RequestType.GET_ACCOUNT_BLOCKS.value,
                "firstIndex": "0",
                "lastIndex": str(self.last_index),
            },
            AccountBlocks.from_json,
        )
        result.blocks = result.blocks[:MAX_ACCOUNT_BLOCKS]
        self.blocks_cache.put(account, result)
        return result

    def get_cached_account_blocks(self, account: str) -> AccountBlocks:
        cached = self.blocks_cache.get(account)
        if cached is not None:
            return cached
        return self.get_account_blocks(account)

    def get_last_account_block(self, account: str) -> Block | None:
        """The most recent block forged by ``account``, or None."""
        try:
            blocks = self.get_account_blocks(account).blocks
        except SignumApiError:
            return None
        return blocks[0] if blocks else None

    def get_block(self, block_id: str) -> Block:
        return self._fetch(
            "GET",
            {"requestType": RequestType.GET_BLOCK.value, "block": block_id},
            Block.from_json,
        )

    def get_blockchain_status(self) -> BlockchainStatus:
        result = self._fetch(
            "GET",
            {"requestType": RequestType.GET_BLOCKCHAIN_STATUS.value},
            BlockchainStatus.from_json,
        )
        self.blockchain_status_cache.put(_BLOCKCHAIN_STATUS_KEY, result)
        return result

    def get_cached_blockchain_status(self) -> BlockchainStatus:
        cached = self.blockchain_status_cache.get(_BLOCKCHAIN_STATUS_KEY)
        if cached is not None:
            return cached
        return self.get_blockchain_status()

    def get_mining_info(self) -> MiningInfo:
        return self._fetch(
            "GET", {"requestType": RequestType.GET_MINING_INFO.value}, MiningInfo.from_json
        )

    def get_suggest_fee(self) -> SuggestFee:
        """Suggested fees, cached; a failed lookup caches empty fees and raises."""
        cached = self.suggest_fee_cache.get(_SUGGEST_FEE_KEY)
        if cached is not None:
            return cached
        try:
            result = self._fetch(
                "GET", {"requestType": RequestType.SUGGEST_FEE.value}, SuggestFee.from_json
            )
        except SignumApiError:
            self.suggest_fee_cache.put(_SUGGEST_FEE_KEY, SuggestFee(minimum=MINIMUM_FEE))
            raise
        result.minimum = MINIMUM_FEE
        self.suggest_fee_cache.put(_SUGGEST_FEE_KEY, result)
        return result

    def get_at_details(self, at: str) -> ATDetails:
        return self._fetch(
            "GET",
            {"requestType": RequestType.GET_AT_DETAILS.value, "at": at},
            ATDetails.from_json,
        )

    def get_asset(self, token: str) -> Asset:
        return self._fetch(
            "GET",
            {"asset": token, "requestType": RequestType.GET_ASSET.value},
            Asset.from_json,
        )

    def get_distribution_amount(self, transaction: str, account: str) -> DistributionAmount:
        return self._fetch(
            "GET",
            {
                "transaction": transaction,
                "account": account,
                "requestType": RequestType.GET_INDIRECT_INCOMING.value,
            },
            DistributionAmount.from_json,
        )