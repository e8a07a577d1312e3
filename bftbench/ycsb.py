"""YCSB workload: Zipf-distributed key requests and the transaction that applies them."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, List, MutableSequence, Optional

from .config import RC, UINT64_MAX, Config
from .helper import MyRand, get_sys_clock

_U_RESOLUTION = 10_000_000


@lru_cache(maxsize=None)
def zeta(n: int, theta: float) -> float:
    """Generalised harmonic number: sum of (1/i)**theta for i in 1..n."""
    return sum((1.0 / i) ** theta for i in range(1, n + 1))


@dataclass
class YCSBRequest:
    """Add value to the record with the given key."""

    key: int
    value: int


class YCSBQuery:
    """A transaction made of several requests to a single table."""

    def __init__(self, requests: Optional[Iterable[YCSBRequest]] = None) -> None:
        self.requests: List[YCSBRequest] = list(requests or [])

    def reset(self) -> None:
        """Drop all requests."""
        self.requests.clear()

    def __repr__(self) -> str:
        return f"YCSBQuery(requests={self.requests!r})"


class YCSBQueryGenerator:
    """Generates queries whose keys follow a Zipf distribution."""

    def __init__(self, config: Config, seed: Optional[int] = None) -> None:
        self.config = config
        self.mrand = MyRand(get_sys_clock() if seed is None else seed)
        self.zeta_2_theta = zeta(2, config.zipf_theta)
        table_size = config.synth_table_size // config.part_cnt
        self.the_n = table_size - 1
        if self.the_n <= 0:
            raise ValueError("table must hold at least two records per partition")
        self.denom = zeta(self.the_n, config.zipf_theta)

    def create_query(self) -> YCSBQuery:
        """Build a query of req_per_query requests, sorted by key if configured."""
        table_size = self.config.synth_table_size
        requests = []
        for _ in range(self.config.req_per_query):
            row_id = self.zipf(table_size - 1, self.config.zipf_theta)
            if row_id >= table_size:
                raise RuntimeError(f"generated key {row_id} outside the table")
            requests.append(YCSBRequest(key=row_id, value=self.mrand.next()))
        if self.config.key_order:
            requests.sort(key=lambda req: req.key)
        return YCSBQuery(requests)

    def zipf(self, n: int, theta: float) -> int:
        """Draw a key in [1, n] from a Zipf distribution with skew theta."""
        if n != self.the_n:
            raise ValueError(f"zipf range {n} differs from generator range {self.the_n}")
        if theta != self.config.zipf_theta:
            raise ValueError(f"zipf theta {theta} differs from configured theta")
        alpha = 1 / (1 - theta)
        zetan = self.denom
        eta = (1 - (2.0 / n) ** (1 - theta)) / (1 - self.zeta_2_theta / zetan)
        u = (self.mrand.next() % _U_RESOLUTION) / _U_RESOLUTION
        uz = u * zetan
        if uz < 1:
            return 1
        if uz < 1 + 0.5**theta:
            return 2
        return 1 + int(n * (eta * u - eta + 1) ** alpha)


class YCSBWorkload:
    """The YCSB workload: key partitioning and transaction managers."""

    def __init__(self, part_cnt: int) -> None:
        if part_cnt <= 0:
            raise ValueError("part_cnt must be positive")
        self.part_cnt = part_cnt
        self.next_tid = 0

    def key_to_part(self, key: int) -> int:
        """Partition that holds a key."""
        return key % self.part_cnt

    def create_txn_manager(self, store: MutableSequence[int]) -> "YCSBTxnManager":
        """New transaction manager working on store."""
        return YCSBTxnManager(self, store)


@dataclass
class TxnStats:
    """Timings of the transactions one manager has run, in nanoseconds."""

    process_time: int = 0
    process_time_short: int = 0
    wait_starttime: int = 0


class YCSBTxnManager:
    """Runs YCSB queries against the client data store."""

    def __init__(self, workload: YCSBWorkload, store: MutableSequence[int]) -> None:
        self.workload = workload
        self.store = store
        self.txn_stats = TxnStats()

    def run_txn(self, query: YCSBQuery) -> RC:
        """Add each request's value to its record, wrapping at 64 bits."""
        start = get_sys_clock()
        for req in query.requests:
            self.store[req.key] = (self.store[req.key] + req.value) & UINT64_MAX
        now = get_sys_clock()
        self.txn_stats.process_time += now - start
        self.txn_stats.process_time_short += now - start
        self.txn_stats.wait_starttime = get_sys_clock()
        return RC.RCOK