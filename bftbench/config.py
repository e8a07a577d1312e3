"""Benchmark configuration: node layout, thread counts, workload parameters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

logger = logging.getLogger(__name__)

BILLION = 1_000_000_000
MILLION = 1_000_000
UINT64_MAX = (1 << 64) - 1

# Replication types.
REPL_AA1 = 1
REPL_AP = 2

# Timestamp allocation methods.
TS_MUTEX = 1
TS_CAS = 2
TS_HW = 3
TS_CLOCK = 4


class RC(IntEnum):
    """Result of running a transaction or a thread."""

    RCOK = 0
    COMMIT = 1
    FINISH = 2
    NONE = 3


class MessageType(IntEnum):
    """Identifiers of the message types exchanged between nodes."""

    INIT_DONE = 0
    KEYEX = 1
    READY = 2
    CL_QRY = 3
    RTXN = 4
    RTXN_CONT = 5
    RINIT = 6
    RDONE = 7
    CL_RSP = 8
    CL_BATCH = 9
    NO_MSG = 10
    EXECUTE_MSG = 11
    BATCH_REQ = 12
    PBFT_PREP_MSG = 13
    PBFT_COMMIT_MSG = 14
    PBFT_CHKPT_MSG = 15


class AccessType(IntEnum):
    """Kind of access a transaction makes to a record."""

    RD = 0
    WR = 1
    XP = 2
    SCAN = 3


@dataclass
class Config:
    """All tunable parameters of one benchmark node."""

    # Node layout.
    node_id: int = 0
    node_cnt: int = 13
    client_node_cnt: int = 1
    repl_cnt: int = 0
    repl_type: int = REPL_AP
    shard_num: int = 4

    # Server threads.
    thread_cnt: int = 5
    rem_thread_cnt: int = 3
    send_thread_cnt: int = 1
    core_cnt: int = 8
    execute_thd: int = 1
    sign_thd: int = 0
    batch_threads: int = 2

    # Client threads.
    client_thread_cnt: int = 2
    client_rem_thread_cnt: int = 1
    client_send_thread_cnt: int = 1
    servers_per_client: int = 0
    clients_per_server: int = 0
    server_start_node: int = 0

    # Partitioning and memory.
    part_cnt: int = 1
    virtual_part_cnt: int = 1
    part_alloc: bool = False
    mem_pad: bool = True
    page_size: int = 4096
    cl_size: int = 64
    cpu_freq: float = 2.6
    hw_migrate: bool = False

    # Timestamps.
    ts_alloc: int = TS_CLOCK
    ts_batch_alloc: bool = False
    ts_batch_num: int = 1

    # Transactions in flight and messaging.
    inflight_max: int = 20000
    msg_size: int = 1048576
    load_per_server: int = 1
    max_txn_per_part: int = 4000
    network_delay: int = 0
    msg_time_limit: int = 0

    # Timers, in nanoseconds.
    done_timer: int = 2 * 60 * BILLION
    warmup_timer: int = 1 * 60 * BILLION
    prog_timer: int = 10 * BILLION
    seq_batch_time_limit: int = 5 * MILLION

    # YCSB workload.
    key_order: bool = False
    query_intvl: int = 1
    part_per_txn: int = 1
    perc_multi_part: float = 1.0
    txn_write_perc: float = 0.5
    tup_write_perc: float = 0.5
    zipf_theta: float = 0.5
    data_perc: float = 100
    access_perc: float = 0.03
    synth_table_size: int = 524288
    req_per_query: int = 1
    strict_ppt: bool = True
    field_per_tuple: int = 10
    init_parallelism: int = 8
    mpr: float = 1.0
    mpitem: float = 0.01

    # Consensus.
    batch_size: int = 100
    txn_per_chkpt: int = 600

    # Statistics.
    stats_enable: bool = True
    time_enable: bool = True
    time_prof_enable: bool = False
    prt_lat_distr: bool = False

    # Derived values.

    @property
    def txn_read_perc(self) -> float:
        return 1.0 - self.txn_write_perc

    @property
    def tup_read_perc(self) -> float:
        return 1.0 - self.tup_write_perc

    @property
    def total_thread_cnt(self) -> int:
        return self.thread_cnt + self.rem_thread_cnt + self.send_thread_cnt

    @property
    def total_client_thread_cnt(self) -> int:
        return (
            self.client_thread_cnt
            + self.client_rem_thread_cnt
            + self.client_send_thread_cnt
        )

    @property
    def total_node_cnt(self) -> int:
        return self.node_cnt + self.client_node_cnt + self.repl_cnt * self.node_cnt

    @property
    def this_thread_cnt(self) -> int:
        return self.client_thread_cnt if self.is_client() else self.thread_cnt

    @property
    def this_rem_thread_cnt(self) -> int:
        return self.client_rem_thread_cnt if self.is_client() else self.rem_thread_cnt

    @property
    def this_send_thread_cnt(self) -> int:
        return (
            self.client_send_thread_cnt if self.is_client() else self.send_thread_cnt
        )

    @property
    def this_total_thread_cnt(self) -> int:
        return (
            self.total_client_thread_cnt if self.is_client() else self.total_thread_cnt
        )

    @property
    def index_size(self) -> int:
        return 2 * self.client_node_cnt * self.inflight_max

    @property
    def min_invalid_nodes(self) -> int:
        return ((self.node_cnt - 1) // self.shard_num) // 3

    @property
    def expected_execute_count(self) -> int:
        return self.batch_size - 2

    @property
    def expected_checkpoint(self) -> int:
        return self.txn_per_chkpt - 5

    # Node roles.

    def is_server_node(self, node_id: int) -> bool:
        """True if node_id names a server replica."""
        return node_id < self.node_cnt

    def is_client_node(self, node_id: int) -> bool:
        """True if node_id names a client node."""
        return self.node_cnt <= node_id < self.node_cnt + self.client_node_cnt

    def is_replica_node(self, node_id: int) -> bool:
        """True if node_id names a backup replica beyond the clients."""
        low = self.node_cnt + self.client_node_cnt
        return low <= node_id < low + self.repl_cnt * self.node_cnt

    def is_server(self) -> bool:
        """True if this node is a server."""
        return self.is_server_node(self.node_id)

    def is_client(self) -> bool:
        """True if this node is a client."""
        return self.is_client_node(self.node_id)

    def init_client_globals(self) -> None:
        """Work out which servers this client talks to."""
        self.servers_per_client = self.node_cnt
        if self.node_cnt > self.client_node_cnt:
            self.clients_per_server = 1
        else:
            self.clients_per_server = self.client_node_cnt // self.node_cnt
        self.server_start_node = 0
        logger.info(
            "Node %d: servicing %d total nodes starting with node %d",
            self.node_id,
            self.servers_per_client,
            self.server_start_node,
        )