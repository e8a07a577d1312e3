"""Counts of transactions a client has in flight at each server."""

from __future__ import annotations

import threading
from typing import List

from .config import Config


class InflightEntry:
    """Thread-safe counter of in-flight transactions, capped at a maximum."""

    def __init__(self, max_inflight: int) -> None:
        self.max_inflight = max_inflight
        self._count = 0
        self._lock = threading.Lock()

    def inc_inflight(self) -> int:
        """Count one more transaction; return the new count, or -1 if at the cap."""
        with self._lock:
            if self._count < self.max_inflight:
                self._count += 1
                return self._count
            return -1

    def dec_inflight(self) -> int:
        """Count one transaction fewer; return the new count, or -1 if there were none."""
        with self._lock:
            if self._count > 0:
                self._count -= 1
                return self._count
            return -1

    def get_inflight(self) -> int:
        """Current number of transactions in flight."""
        with self._lock:
            return self._count


class ClientTxn:
    """In-flight counters, one per server this client serves."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._entries: List[InflightEntry] = [
            InflightEntry(config.inflight_max) for _ in range(config.servers_per_client)
        ]

    def _entry(self, node_id: int) -> InflightEntry:
        if not 0 <= node_id < self.config.node_cnt:
            raise ValueError(f"node {node_id} is not a server")
        return self._entries[node_id]

    def inc_inflight(self, node_id: int) -> int:
        return self._entry(node_id).inc_inflight()

    def dec_inflight(self, node_id: int) -> int:
        return self._entry(node_id).dec_inflight()

    def get_inflight(self, node_id: int) -> int:
        return self._entry(node_id).get_inflight()