# bftbench

Building blocks for driving and measuring a replicated, Byzantine-fault-tolerant
key-value benchmark from the client side. The package has no dependencies
beyond the standard library.

## Modules

- `bftbench.config` – `Config`, a dataclass holding every benchmark parameter
  (node layout, thread counts, YCSB settings, timers) with derived properties
  such as `total_thread_cnt` and `min_invalid_nodes`; node-role checks
  (`is_server`, `is_client`, `is_server_node`, `is_client_node`,
  `is_replica_node`) and `init_client_globals`, which sets
  `servers_per_client` and `clients_per_server`. Also the enums `RC`,
  `MessageType` and `AccessType`.
- `bftbench.ycsb` – `YCSBQueryGenerator` draws keys from a Zipf distribution
  (using `zeta`) and builds `YCSBQuery` objects of `YCSBRequest` items, sorted
  by key when `Config.key_order` is set. `YCSBWorkload` maps keys to partitions
  and creates `YCSBTxnManager`s, whose `run_txn` adds each request's value to
  its record in a store, wrapping at 64 bits.
- `bftbench.client_query` – `ClientQueryQueue` generates
  `max_txn_per_part + 4` queries up front and hands them out in turn, starting
  again from the first after `max_txn_per_part + 1` of them.
- `bftbench.client_txn` – `InflightEntry`, a thread-safe counter capped at a
  maximum (`inc_inflight` returns -1 at the cap), and `ClientTxn`, one such
  counter per server.
- `bftbench.stats_array` – `StatsArr`, a sample store that either keeps every
  value (`StatsArrType.ARR_INCR`, doubling when full) or counts values into
  buckets (`StatsArrType.ARR_INSERT`), with percentiles and averages.
- `bftbench.thread_stats` – `ThreadStats`, the counters of one thread, which can
  be combined and formatted as client or server reports.
- `bftbench.stats` – `Stats`, which combines all threads' figures and writes the
  `[summary]` or `[prog]` report, followed by memory use read from
  `/proc/self/status` (omitted where that file does not exist) and CPU use.
- `bftbench.helper` – clocks in nanoseconds, the deterministic `MyRand`
  generator, key-merging helpers and `ItemId`.
- `bftbench.array` – `BoundedArray`, a sequence that raises `OverflowError`
  when filled past its capacity.
- `bftbench.lockfree_queue` – `LockfreeQueue`, a FIFO queue that never blocks;
  `dequeue` raises `IndexError` when it is empty.
- `bftbench.node_state` – `NodeState`, shared per-node counters (next index,
  batch index, checkpoints, views, socket round robin, key slots, client data
  store), and `calculate_hash`, a SHA-256 digest.

## Installation

```
pip install .
```

## Example

```python
import sys

from bftbench.config import Config
from bftbench.client_query import ClientQueryQueue
from bftbench.client_txn import ClientTxn
from bftbench.stats import Stats
from bftbench.ycsb import YCSBWorkload

config = Config(node_id=13)          # the first client node with 13 servers
config.init_client_globals()

queue = ClientQueryQueue(config, seed=42)
store = [0] * config.synth_table_size
txn = YCSBWorkload(config.part_cnt).create_txn_manager(store)

inflight = ClientTxn(config)
for _ in range(10):
    if inflight.inc_inflight(0) >= 0:
        txn.run_txn(queue.get_next_query(0))
        inflight.dec_inflight(0)

stats = Stats(config, config.total_client_thread_cnt)
stats.util_init()
stats.threads[0].txn_cnt = 10
stats.print_client(False, sys.stdout)
```

## What the package does not do

It provides no command and no running benchmark: there are no client or
server threads, no network transport, no message encoding, no signing or key
generation, and no consensus protocol. The pieces here are meant to be wired
into such a program.

## Running the tests

```
pip install .[test]
pytest
```