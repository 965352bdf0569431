"""Node pool, failover requests and time-limited caches for the Signum API."""

from __future__ import annotations

import functools
import logging
import random
import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Generic, Hashable, Iterable, Mapping, TypeVar

from ..api_client import ApiError, JsonApiClient
from .models import BlockchainStatus, RequestType

logger = logging.getLogger(__name__)

API_METHOD = "/burst"
LOCAL_NODE_MARKER = ":8125"

# Failures that make a POST worth retrying on another node.
_RETRIABLE_ERRORS = (
    "connection refused",
    "host unreachable",
    "tls handshake timeout",
    "remote error",
    "statuscode",
    "certificate has expired",
)

V = TypeVar("V")


class SignumApiError(ApiError):
    """Raised when no node could answer a request, or a node reported an error."""


def _seconds(value: timedelta | float) -> float:
    return value.total_seconds() if isinstance(value, timedelta) else float(value)


def delete_substr(text: str, start_marker: str, end_marker: str) -> str:
    """Cut out the part of ``text`` from ``start_marker`` up to ``end_marker``.

    The end marker itself is kept. Without an end marker the rest of the text is
    dropped. A start marker at the very beginning leaves the text unchanged.
    """
    start = text.find(start_marker)
    if start <= 0:
        return text
    length = text[start:].find(end_marker)
    if length < 0:
        return text[:start]
    return text[:start] + text[start + length :]


@dataclass
class NodeStatus:
    """A node together with its chain height and response time in seconds."""

    client: JsonApiClient
    number_of_blocks: int = 0
    latency: float = 0.0

    @property
    def host(self) -> str:
        return self.client.api_host


def _compare_nodes(first: NodeStatus, second: NodeStatus) -> int:
    # A node may be one block out of sync before its height matters.
    if first.number_of_blocks - 1 > second.number_of_blocks:
        return -1
    if first.number_of_blocks < second.number_of_blocks - 1:
        return 1
    if first.latency < second.latency:
        return -1
    if first.latency > second.latency:
        return 1
    return 0


def order_nodes(nodes: Iterable[NodeStatus]) -> list[NodeStatus]:
    """Order nodes by chain height (one block of slack), then by latency."""
    return sorted(nodes, key=functools.cmp_to_key(_compare_nodes))


def probe_host(host: str) -> NodeStatus:
    """Ask ``host`` for its blockchain status and time the answer."""
    client = JsonApiClient(host)
    started = time.perf_counter()
    try:
        data = client.request(
            "GET", API_METHOD, {"requestType": RequestType.GET_BLOCKCHAIN_STATUS.value}
        )
        status = BlockchainStatus.from_json(data)
    except ValueError as exc:
        logger.warning("Failed request to %s: %s", host, exc)
        raise ApiError(f"couldn't decode blockchain status of {host}: {exc}") from exc
    except ApiError as exc:
        logger.warning("Failed request to %s: %s", host, exc)
        raise
    latency = time.perf_counter() - started
    return NodeStatus(client=client, number_of_blocks=status.number_of_blocks, latency=latency)


@dataclass
class _Entry(Generic[V]):
    value: V
    stored_at: float = field(default_factory=time.monotonic)


class TtlCache(Generic[V]):
    """A thread-safe mapping whose entries expire ``ttl`` after being stored."""

    def __init__(self, ttl: timedelta | float):
        self.ttl = _seconds(ttl)
        self._lock = threading.Lock()
        self._entries: dict[Hashable, _Entry[V]] = {}

    def get(self, key: Hashable) -> V | None:
        """Return the value stored under ``key`` if it is still fresh."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is not None and time.monotonic() - entry.stored_at < self.ttl:
            return entry.value
        return None

    def put(self, key: Hashable, value: V) -> None:
        with self._lock:
            self._entries[key] = _Entry(value)

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)


def _node_error(data: Any) -> str:
    if not isinstance(data, Mapping):
        return ""
    error = data.get("error")
    if isinstance(error, str) and error:
        return error
    description = data.get("errorDescription")
    return "" if description is None else str(description)


def _is_retriable(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in _RETRIABLE_ERRORS)


class SignumClientBase:
    """Keeps a ranked pool of nodes and sends each request to them in turn."""

    def __init__(
        self,
        api_hosts: Iterable[str],
        cache_ttl: timedelta | float,
        last_index: int,
        rebuild_period: timedelta | float,
        preload_names: bool,
    ):
        self.api_hosts = [host for host in api_hosts if host]
        self.cache_ttl = _seconds(cache_ttl)
        self.last_index = last_index
        self.rebuild_period = _seconds(rebuild_period)
        self.preload_names = preload_names

        self._pool_lock = threading.Lock()
        self._nodes = [NodeStatus(client=JsonApiClient(host)) for host in self.api_hosts]

        self.account_cache: TtlCache[Any] = TtlCache(self.cache_ttl)
        self.blocks_cache: TtlCache[Any] = TtlCache(self.cache_ttl)
        self.transactions_cache: TtlCache[Any] = TtlCache(self.cache_ttl)
        self.blockchain_status_cache: TtlCache[Any] = TtlCache(self.cache_ttl)
        self.suggest_fee_cache: TtlCache[Any] = TtlCache(self.cache_ttl)
        self.big_wallet_names: dict[str, str] = {}
        self.names_lock = threading.Lock()

    def rebuild_api_clients(self) -> list[NodeStatus]:
        """Probe every host and rank the ones that answered.

        The pool is replaced only if at least one node answered; the ranked
        nodes are returned either way.
        """
        logger.info("Start rebuild Signum API Clients")
        started = time.perf_counter()
        answered = []
        for host in self.api_hosts:
            try:
                node = probe_host(host)
            except ApiError:
                continue
            logger.debug(
                "Signum API Clients Rebuilder requested %s (%s) for %.3fs",
                node.host,
                node.number_of_blocks,
                node.latency,
            )
            answered.append(node)
        nodes = order_nodes(answered)
        logger.info(
            "Signum API Clients has been rebuilt in %.3fs", time.perf_counter() - started
        )
        if nodes:
            with self._pool_lock:
                self._nodes = list(nodes)
        else:
            logger.error("Could not rebuild api clients")
        return nodes

    def _request_order(self) -> list[NodeStatus]:
        with self._pool_lock:
            nodes = list(self._nodes)
        if not nodes:
            raise SignumApiError("no Signum API clients available")
        offset = 1 if LOCAL_NODE_MARKER in nodes[0].host else 0
        count = len(nodes) // 2
        head = nodes[offset : offset + count]
        random.shuffle(head)
        nodes[offset : offset + count] = head
        return nodes

    def request(self, http_method: str, params: Mapping[str, str]) -> Any:
        """Send a request to the nodes in turn and return the first good answer.

        GET requests, and POST requests that failed to reach a node, move on to
        the next node; any other POST failure is raised at once.
        """
        last_error: Exception | None = None
        for node in self._request_order():
            try:
                data = node.client.request(http_method, API_METHOD, dict(params))
                node_error = _node_error(data)
                if node_error:
                    raise SignumApiError(node_error)
                return data
            except ApiError as exc:
                message = delete_substr(str(exc), "secretPhrase=", '"')
                last_error = SignumApiError(message)
                logger.warning("Signum API request error: %s", message)
                if http_method == "POST" and not _is_retriable(message):
                    raise last_error from None
        raise SignumApiError(f"couldn't get {API_METHOD} method: {last_error}")