"""Shared run-time state of one node: indices, checkpoints, views and key exchange."""

from __future__ import annotations

import hashlib
import threading
from typing import List, Union

from .config import Config


def calculate_hash(data: Union[str, bytes]) -> bytes:
    """SHA-256 digest of a string or byte string."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).digest()


class NodeState:
    """Counters and flags shared by the threads of one node."""

    def __init__(self, config: Config) -> None:
        self.config = config

        # Index of the next transaction to be executed.
        self.next_index = 0
        self._next_index_lock = threading.Lock()

        # Checkpointing.
        self.last_stable_chkpt = 0
        self.txn_per_chkpt = config.txn_per_chkpt
        self.last_deleted_txn_man = 0
        self.last_valid_txn = 0
        self.expected_execute_count = config.expected_execute_count
        self.expected_checkpoint = config.expected_checkpoint

        # Threads that have finished setting up.
        self.common_var = 0
        self._ready_lock = threading.Lock()

        # Batch linearisation at the primary.
        self.next_idx = 0
        self._next_idx_lock = threading.Lock()

        # Socket round robin for input threads.
        self.sock_ctr: List[int] = [0] * max(
            config.rem_thread_cnt, config.this_rem_thread_cnt
        )

        # Views: the client's notion of the primary, and each thread's own.
        self.view = 0
        self.local_view: List[int] = [0] * (config.thread_cnt + config.rem_thread_cnt)

        # Key exchange.
        node_slots = config.node_cnt + config.client_node_cnt
        self.key_avail = False
        self.tot_key = 0
        self.received_keys: List[int] = [0] * node_slots
        self.pub_keys: List[str] = [""] * node_slots
        self.cmac_private_keys: List[str] = [""] * node_slots
        self.cmac_others_keys: List[str] = [""] * node_slots

        # Data the client transactions operate on.
        self.client_data_store: List[int] = [0] * config.synth_table_size

        # Worker idle times reported in statistics.
        self.idle_worker_times: List[float] = [0.0] * config.thread_cnt
        self.output_thd_idle_time: List[float] = [0.0] * config.send_thread_cnt

    def inc_next_index(self) -> int:
        """Advance the index of the next transaction to execute; return the new value."""
        with self._next_index_lock:
            self.next_index += 1
            return self.next_index

    def get_and_inc_next_idx(self) -> int:
        """Return the next batch index and advance it."""
        with self._next_idx_lock:
            value = self.next_idx
            self.next_idx += 1
            return value

    def get_next_socket(self, tid: int, size: int) -> int:
        """Next socket, modulo size, for the input thread tid."""
        abs_tid = tid % self.config.this_rem_thread_cnt
        nsock = (self.sock_ctr[abs_tid] + 1) % size
        self.sock_ctr[abs_tid] = nsock
        return nsock

    def nodes_to_send(self, beg: int, end: int) -> List[int]:
        """Node ids in [beg, end) other than this node."""
        return [node for node in range(beg, end) if node != self.config.node_id]

    def inc_last_deleted_txn(self) -> int:
        """Count one more deleted transaction manager; return the new count."""
        self.last_deleted_txn_man += 1
        return self.last_deleted_txn_man

    def mark_ready(self) -> int:
        """Record that one more thread has finished setup; return how many have."""
        with self._ready_lock:
            self.common_var += 1
            return self.common_var