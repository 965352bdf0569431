from urllib.parse import parse_qs, urlparse

import pytest
import responses

from signum_explorer.signum.accounts import BIG_WALLET_NAMES, AccountsMixin
from signum_explorer.signum.base import SignumApiError, SignumClientBase
from signum_explorer.signum.models import MINIMUM_FEE

HOST = "http://node.example.com"
URL = HOST + "/burst"


class _Client(AccountsMixin, SignumClientBase):
    pass


@pytest.fixture
def client():
    return _Client([HOST], 60, 9, 1800, False)


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def _query(call):
    return {key: values[0] for key, values in parse_qs(urlparse(call.request.url).query).items()}


ACCOUNT_JSON = {
    "name": "alice",
    "account": "1234567890",
    "accountRS": "S-AAAA-BBBB-CCCC-DDDDD",
    "balanceNQT": "500000000",
    "unconfirmedBalanceNQT": "400000000",
    "committedBalanceNQT": "100000000",
}


def test_get_account_parses_and_sends_params(client, rsps):
    rsps.add(responses.GET, URL, json=ACCOUNT_JSON)
    account = AccountsMixin.get_account(client, "1234567890")
    assert account.name == "alice"
    assert account.total_balance_nqt == 500000000
    assert account.committed_balance_nqt == 100000000
    query = _query(rsps.calls[0])
    assert query["requestType"] == "getAccount"
    assert query["getCommittedAmount"] == "true"
    assert query["account"] == "1234567890"


def test_cached_account_served_by_id_and_address(client, rsps):
    rsps.add(responses.GET, URL, json=ACCOUNT_JSON)
    first = AccountsMixin.get_cached_account(client, "1234567890")
    by_rs = AccountsMixin.get_cached_account(client, "S-AAAA-BBBB-CCCC-DDDDD")
    assert by_rs is first
    assert by_rs.name == "alice"
    assert len(rsps.calls) == 1


def test_invalidate_account_forces_refetch(client, rsps):
    rsps.add(responses.GET, URL, json=ACCOUNT_JSON)
    AccountsMixin.get_cached_account(client, "1234567890")
    AccountsMixin.invalidate_account(client, "1234567890")
    account = AccountsMixin.get_cached_account(client, "1234567890")
    assert account.account == "1234567890"
    assert len(rsps.calls) == 2


def test_get_account_error_description_raises(client, rsps):
    rsps.add(responses.GET, URL, json={"errorDescription": "Unknown account"})
    with pytest.raises(SignumApiError, match="Unknown account"):
        AccountsMixin.get_account(client, "1")


def test_get_account_bad_number_raises(client, rsps):
    rsps.add(responses.GET, URL, json={**ACCOUNT_JSON, "balanceNQT": "lots"})
    with pytest.raises(SignumApiError):
        AccountsMixin.get_account(client, "1234567890")


def test_get_account_id_uses_post(client, rsps):
    rsps.add(responses.POST, URL, json={"account": "42", "accountRS": "S-AAAA-BBBB-CCCC-EEEEE"})
    account = AccountsMixin.get_account_id(client, "secret")
    assert account.account == "42"
    assert rsps.calls[0].request.method == "POST"
    assert _query(rsps.calls[0])["requestType"] == "getAccountId"


def test_account_blocks_truncated_and_cached(client, rsps):
    blocks = [{"block": str(i), "height": 1000 - i, "timestamp": i} for i in range(15)]
    rsps.add(responses.GET, URL, json={"blocks": blocks})
    result = AccountsMixin.get_cached_account_blocks(client, "77")
    assert [block.block for block in result.blocks] == [str(i) for i in range(10)]
    assert AccountsMixin.get_cached_account_blocks(client, "77") is result
    assert len(rsps.calls) == 1
    query = _query(rsps.calls[0])
    assert query["requestType"] == "getAccountBlocks"
    assert query["lastIndex"] == "9"
    assert query["firstIndex"] == "0"


def test_last_account_block(client, rsps):
    rsps.add(responses.GET, URL, json={"blocks": [{"block": "b1"}, {"block": "b2"}]})
    assert AccountsMixin.get_last_account_block(client, "77").block == "b1"


def test_last_account_block_none_on_failure(client, rsps):
    rsps.add(responses.GET, URL, status=500, body="down")
    assert AccountsMixin.get_last_account_block(client, "77") is None


def test_last_account_block_none_when_empty(client, rsps):
    rsps.add(responses.GET, URL, json={"blocks": []})
    assert AccountsMixin.get_last_account_block(client, "77") is None


def test_get_block(client, rsps):
    rsps.add(responses.GET, URL, json={"block": "999", "height": 123, "blockReward": "127"})
    block = AccountsMixin.get_block(client, "999")
    assert block.height == 123
    assert block.block_reward == "127"
    assert _query(rsps.calls[0])["block"] == "999"


def test_cached_blockchain_status(client, rsps):
    rsps.add(responses.GET, URL, json={"numberOfBlocks": 1000000})
    status = AccountsMixin.get_cached_blockchain_status(client)
    again = AccountsMixin.get_cached_blockchain_status(client)
    assert status.number_of_blocks == 1000000
    assert again is status
    assert len(rsps.calls) == 1


def test_get_mining_info(client, rsps):
    rsps.add(
        responses.GET,
        URL,
        json={
            "height": "927000",
            "baseTarget": "280000",
            "lastBlockReward": "127",
            "averageCommitmentNQT": "250000000000",
            "timestamp": "100",
        },
    )
    info = AccountsMixin.get_mining_info(client)
    assert info.height == 927000
    assert info.base_target == 280000
    assert info.average_commitment_nqt == 250000000000
    assert _query(rsps.calls[0])["requestType"] == "getMiningInfo"


def test_suggest_fee_sets_minimum_and_caches(client, rsps):
    rsps.add(responses.GET, URL, json={"cheap": 2000000, "standard": 3000000, "priority": 4000000})
    fee = AccountsMixin.get_suggest_fee(client)
    assert fee.minimum == MINIMUM_FEE
    assert fee.standard == 3000000
    assert AccountsMixin.get_suggest_fee(client) is fee
    assert len(rsps.calls) == 1


def test_suggest_fee_failure_raises_then_serves_empty_fees(client, rsps):
    rsps.add(responses.GET, URL, status=500, body="down")
    with pytest.raises(SignumApiError):
        AccountsMixin.get_suggest_fee(client)
    fee = AccountsMixin.get_suggest_fee(client)
    assert fee.minimum == MINIMUM_FEE
    assert fee.cheap == 0
    assert len(rsps.calls) == 1


def test_get_at_details(client, rsps):
    rsps.add(responses.GET, URL, json={"at": "55", "balanceNQT": "300", "name": "contract"})
    details = AccountsMixin.get_at_details(client, "55")
    assert details.balance_nqt == 300
    assert details.name == "contract"
    assert _query(rsps.calls[0])["at"] == "55"


def test_get_asset(client, rsps):
    rsps.add(responses.GET, URL, json={"asset": "66", "name": "TOKEN", "decimals": 4})
    asset = AccountsMixin.get_asset(client, "66")
    assert asset.name == "TOKEN"
    assert asset.decimals == 4
    assert _query(rsps.calls[0])["requestType"] == "getAsset"


def test_get_distribution_amount(client, rsps):
    rsps.add(responses.GET, URL, json={"amountNQT": "250000000", "quantityQNT": "10"})
    distribution = AccountsMixin.get_distribution_amount(client, "tx1", "77")
    assert distribution.amount_nqt == 250000000
    assert distribution.amount == 2.5
    query = _query(rsps.calls[0])
    assert query["requestType"] == "getIndirectIncoming"
    assert query["transaction"] == "tx1"


def test_preload_names_uses_defaults_on_failure(client, rsps):
    rsps.add(responses.GET, URL, status=500, body="down")
    AccountsMixin.preload_names_for_big_wallets(client)
    assert client.big_wallet_names == BIG_WALLET_NAMES


def test_preload_names_uses_node_names(client, rsps):
    rsps.add(responses.GET, URL, json={"name": "renamed", "account": "x", "accountRS": "y"})
    AccountsMixin.preload_names_for_big_wallets(client)
    assert set(client.big_wallet_names.values()) == {"renamed"}
    assert set(client.big_wallet_names) == set(BIG_WALLET_NAMES)


def test_cached_account_name_prefers_preloaded(client, rsps):
    client.big_wallet_names["13383190289605706987"] = "Bittrex"
    assert AccountsMixin.get_cached_account_name(client, "13383190289605706987") == "Bittrex"
    assert len(rsps.calls) == 0


def test_cached_account_name_fetches_and_caches(client, rsps):
    rsps.add(responses.GET, URL, json=ACCOUNT_JSON)
    assert AccountsMixin.get_cached_account_name(client, "1234567890") == "alice"
    assert AccountsMixin.get_cached_account_name(client, "1234567890") == "alice"
    assert len(rsps.calls) == 1


def test_cached_account_name_empty_on_failure(client, rsps):
    rsps.add(responses.GET, URL, status=500, body="down")
    assert AccountsMixin.get_cached_account_name(client, "1234567890") == ""