import threading

import pytest

from bftbench.client_txn import ClientTxn, InflightEntry
from bftbench.config import Config


def _client(**kwargs):
    config = Config(node_id=13, **kwargs)
    config.init_client_globals()
    return ClientTxn(config)


def test_entry_counts_up_to_cap():
    entry = InflightEntry(2)
    assert entry.inc_inflight() == 1
    assert entry.inc_inflight() == 2
    assert entry.inc_inflight() == -1
    assert entry.get_inflight() == 2


def test_entry_decrement():
    entry = InflightEntry(2)
    entry.inc_inflight()
    entry.inc_inflight()
    assert entry.dec_inflight() == 1
    assert entry.dec_inflight() == 0
    assert entry.dec_inflight() == -1
    assert entry.get_inflight() == 0


def test_entry_concurrent_increments_respect_cap():
    entry = InflightEntry(50)
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(20):
            value = entry.inc_inflight()
            with lock:
                results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    successes = sorted(v for v in results if v > 0)
    assert successes == list(range(1, 51))
    assert entry.get_inflight() == 50


def test_client_nodes_are_independent():
    client = _client(inflight_max=3)
    client.inc_inflight(0)
    client.inc_inflight(0)
    client.inc_inflight(4)
    assert client.get_inflight(0) == 2
    assert client.get_inflight(4) == 1
    assert client.get_inflight(1) == 0
    assert client.dec_inflight(0) == 1


def test_client_cap_applies_per_node():
    client = _client(inflight_max=1)
    assert client.inc_inflight(2) == 1
    assert client.inc_inflight(2) == -1
    assert client.inc_inflight(3) == 1


def test_client_rejects_non_server_node():
    client = _client()
    with pytest.raises(ValueError):
        client.inc_inflight(13)
    with pytest.raises(ValueError):
        client.get_inflight(-1)