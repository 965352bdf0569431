from datetime import timedelta

import pytest
import responses

from signum_explorer.api_client import ApiError, JsonApiClient
from signum_explorer.signum.base import (
    NodeStatus,
    SignumApiError,
    SignumClientBase,
    TtlCache,
    delete_substr,
    order_nodes,
    probe_host,
)

HOST_A = "http://node-a.example"
HOST_B = "http://node-b.example"
HOST_C = "http://node-c.example"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def make_client(*hosts):
    return SignumClientBase(list(hosts), timedelta(minutes=2), 9, timedelta(minutes=30), False)


def node(host, blocks, latency):
    return NodeStatus(client=JsonApiClient(host), number_of_blocks=blocks, latency=latency)


def test_delete_substr_cuts_up_to_end_marker():
    text = 'error for url?secretPhrase=hidden" tail'
    assert delete_substr(text, "secretPhrase=", '"') == 'error for url?" tail'


def test_delete_substr_without_end_marker_truncates():
    assert delete_substr("abc secretPhrase=hidden", "secretPhrase=", '"') == "abc "


def test_delete_substr_keeps_text_when_marker_at_start_or_missing():
    assert delete_substr('secretPhrase=x"', "secretPhrase=", '"') == 'secretPhrase=x"'
    assert delete_substr("nothing here", "secretPhrase=", '"') == "nothing here"


def test_order_nodes_prefers_higher_chain():
    low = node(HOST_A, 100, 0.01)
    high = node(HOST_B, 105, 0.5)
    assert [n.host for n in order_nodes([low, high])] == [HOST_B, HOST_A]


def test_order_nodes_uses_latency_within_one_block():
    slow = node(HOST_A, 100, 0.5)
    fast = node(HOST_B, 101, 0.1)
    assert [n.host for n in order_nodes([slow, fast])] == [HOST_B, HOST_A]


def test_ttl_cache_returns_fresh_values():
    cache = TtlCache(timedelta(minutes=5))
    cache.put("key", 42)
    assert cache.get("key") == 42
    assert cache.get("missing") is None


def test_ttl_cache_expires_and_invalidates():
    expired = TtlCache(0)
    expired.put("key", 1)
    assert expired.get("key") is None

    cache = TtlCache(60)
    cache.put("key", 1)
    cache.invalidate("key")
    assert cache.get("key") is None


def test_probe_host_reads_blocks(mocked):
    mocked.add(responses.GET, f"{HOST_A}/burst", json={"numberOfBlocks": 500})
    status = probe_host(HOST_A)
    assert status.number_of_blocks == 500
    assert status.host == HOST_A
    assert status.latency >= 0
    assert "requestType=getBlockchainStatus" in mocked.calls[0].request.url


def test_probe_host_raises_on_failure(mocked):
    mocked.add(responses.GET, f"{HOST_A}/burst", status=500, body="down")
    with pytest.raises(ApiError):
        probe_host(HOST_A)


def test_rebuild_ranks_answering_nodes(mocked):
    mocked.add(responses.GET, f"{HOST_A}/burst", json={"numberOfBlocks": 100})
    mocked.add(responses.GET, f"{HOST_B}/burst", json={"numberOfBlocks": 200})
    mocked.add(responses.GET, f"{HOST_C}/burst", status=503, body="down")
    client = make_client(HOST_A, HOST_B, HOST_C)
    assert [n.host for n in client.rebuild_api_clients()] == [HOST_B, HOST_A]


def test_rebuild_with_no_answers_returns_empty(mocked):
    mocked.add(responses.GET, f"{HOST_A}/burst", status=500, body="down")
    client = make_client(HOST_A)
    assert client.rebuild_api_clients() == []


def test_request_fails_over_on_get(mocked):
    mocked.add(responses.GET, f"{HOST_A}/burst", status=500, body="down")
    mocked.add(responses.GET, f"{HOST_B}/burst", json={"height": "7"})
    client = make_client(HOST_A, HOST_B)
    assert client.request("GET", {"requestType": "getMiningInfo"}) == {"height": "7"}


def test_request_post_node_error_is_raised_at_once(mocked):
    mocked.add(responses.POST, f"{HOST_A}/burst", json={"errorDescription": "Not enough funds"})
    mocked.add(responses.POST, f"{HOST_B}/burst", json={"transaction": "1"})
    client = make_client(HOST_A, HOST_B)
    with pytest.raises(SignumApiError, match="Not enough funds"):
        client.request("POST", {"requestType": "sendMoney"})
    assert len(mocked.calls) == 1


def test_request_scrubs_secret_phrase(mocked):
    mocked.add(
        responses.POST,
        f"{HOST_A}/burst",
        json={"errorDescription": 'bad request secretPhrase=hidden" end'},
    )
    client = make_client(HOST_A)
    with pytest.raises(SignumApiError) as info:
        client.request("POST", {"requestType": "sendMoney"})
    assert "hidden" not in str(info.value)


def test_request_all_nodes_failing(mocked):
    mocked.add(responses.GET, f"{HOST_A}/burst", status=500, body="down")
    mocked.add(responses.GET, f"{HOST_B}/burst", json={"errorDescription": "Unknown account"})
    client = make_client(HOST_A, HOST_B)
    with pytest.raises(SignumApiError, match="couldn't get /burst method"):
        client.request("GET", {"requestType": "getAccount"})


def test_request_without_nodes_raises():
    client = make_client("")
    with pytest.raises(SignumApiError):
        client.request("GET", {"requestType": "getAccount"})