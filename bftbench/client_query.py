"""Pre-generated queries that client threads take in turn."""

from __future__ import annotations

import threading
from typing import List, Optional

from .config import Config
from .ycsb import YCSBQuery, YCSBQueryGenerator


class ClientQueryQueue:
    """A ring of queries generated up front, handed out in order."""

    def __init__(self, config: Config, seed: Optional[int] = None) -> None:
        self.config = config
        request_cnt = config.max_txn_per_part + 4
        self.queries: List[Optional[YCSBQuery]] = [None] * request_cnt
        self._query_cnt = 0
        self._lock = threading.Lock()

        parallelism = config.init_parallelism
        chunk = request_cnt // parallelism
        for tid in range(parallelism):
            start = chunk * tid
            end = request_cnt if tid == parallelism - 1 else chunk * (tid + 1)
            gen = YCSBQueryGenerator(config, None if seed is None else seed + tid)
            for query_id in range(start, end):
                self.queries[query_id] = gen.create_query()

    def done(self) -> bool:
        """The queue never runs out: queries are reused from the start."""
        return False

    def get_next_query(self, thread_id: int) -> YCSBQuery:
        """Next query in turn, wrapping after max_txn_per_part + 1 of them."""
        with self._lock:
            query_id = self._query_cnt
            self._query_cnt += 1
            if query_id > self.config.max_txn_per_part:
                self._query_cnt = 0
                query_id = self._query_cnt
                self._query_cnt += 1
        query = self.queries[query_id]
        assert query is not None
        return query