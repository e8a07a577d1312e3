import hashlib
import threading

import pytest

from bftbench.config import Config
from bftbench.node_state import NodeState, calculate_hash


def _state(**kwargs):
    return NodeState(Config(synth_table_size=100, **kwargs))


def test_calculate_hash_of_empty_string():
    assert calculate_hash("").hex() == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_calculate_hash_str_and_bytes_agree():
    assert calculate_hash("abc") == calculate_hash(b"abc")
    assert len(calculate_hash(b"abc")) == hashlib.sha256().digest_size


def test_nodes_to_send_skips_self():
    state = _state(node_id=2)
    assert state.nodes_to_send(0, 5) == [0, 1, 3, 4]


def test_nodes_to_send_empty_range():
    state = _state(node_id=0)
    assert state.nodes_to_send(3, 3) == []


def test_get_and_inc_next_idx():
    state = _state()
    assert [state.get_and_inc_next_idx() for _ in range(3)] == [0, 1, 2]
    assert state.next_idx == 3


def test_inc_next_index_is_thread_safe():
    state = _state()

    def work():
        for _ in range(1000):
            state.inc_next_index()

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert state.next_index == 4000


def test_get_next_socket_cycles_per_thread():
    state = _state(node_id=0)
    sockets = [state.get_next_socket(0, 3) for _ in range(4)]
    assert sockets == [1, 2, 0, 1]
    assert state.get_next_socket(1, 3) == 1


def test_get_next_socket_wraps_thread_id():
    state = _state(node_id=0)
    rem = state.config.rem_thread_cnt
    state.get_next_socket(0, 10)
    assert state.get_next_socket(rem, 10) == 2


def test_inc_last_deleted_txn():
    state = _state()
    assert state.inc_last_deleted_txn() == 1
    assert state.inc_last_deleted_txn() == 2
    assert state.last_deleted_txn_man == 2


def test_mark_ready_counts():
    state = _state()
    assert [state.mark_ready() for _ in range(3)] == [1, 2, 3]


def test_sizes_follow_config():
    config = Config(synth_table_size=50)
    state = NodeState(config)
    assert len(state.client_data_store) == 50
    assert len(state.local_view) == config.thread_cnt + config.rem_thread_cnt
    assert len(state.received_keys) == config.node_cnt + config.client_node_cnt
    assert state.expected_execute_count == config.batch_size - 2


def test_get_next_socket_zero_size_raises():
    state = _state()
    with pytest.raises(ZeroDivisionError):
        state.get_next_socket(0, 0)