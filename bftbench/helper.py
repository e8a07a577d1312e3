"""Small helpers shared across the benchmark: clocks, key merging, item ids, a PRNG."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

# Largest value returned by the C library's rand() on common platforms.
RAND_MAX = 2147483647

_MYRAND_MULTIPLIER = 1103515247
_MYRAND_INCREMENT = 12345
_MYRAND_MODULUS = 1 << 63
_MYRAND_DIVISOR = 65537


class DataType(Enum):
    """Kind of data item an ItemId points to."""

    DT_TABLE = 0
    DT_PAGE = 1
    DT_ROW = 2


@dataclass
class ItemId:
    """Reference to a table, page or row; equality looks at type and location only."""

    type: DataType = DataType.DT_ROW
    location: Any = 0
    next: Optional["ItemId"] = field(default=None, compare=False, repr=False)
    valid: bool = field(default=False, compare=False)

    def init(self) -> None:
        """Return the item to its empty, invalid state."""
        self.valid = False
        self.location = 0
        self.next = None

    def assign(self, other: "ItemId") -> None:
        """Copy type, location and validity from another item, which must be valid."""
        if not other.valid:
            raise ValueError("cannot assign from an invalid item")
        self.valid = other.valid
        self.type = other.type
        self.location = other.location


class MyRand:
    """Linear congruential generator used for workload generation."""

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def next(self) -> int:
        """Advance the generator and return the next value in [0, RAND_MAX)."""
        self.seed = (
            self.seed * _MYRAND_MULTIPLIER + _MYRAND_INCREMENT
        ) % _MYRAND_MODULUS
        return (self.seed // _MYRAND_DIVISOR) % RAND_MAX


def get_thdid_from_txnid(txnid: int, thread_cnt: int) -> int:
    """Worker thread responsible for a transaction id."""
    return txnid % thread_cnt


def key_to_part(key: int, part_cnt: int, part_alloc: bool) -> int:
    """Partition a YCSB key belongs to; always 0 without partitioned allocation."""
    if part_alloc:
        return key % part_cnt
    return 0


def merge_key_list(keys: Sequence[int]) -> int:
    """Pack several keys into one 64-bit key, each taking 64 // len(keys) bits."""
    if not keys:
        raise ValueError("at least one key is required")
    width = 64 // len(keys)
    if width == 0:
        raise ValueError("too many keys to fit in 64 bits")
    limit = 1 << width
    merged = 0
    for key in keys:
        if not 0 <= key < limit:
            raise ValueError(f"key {key} does not fit in {width} bits")
        merged = (merged << width) | key
    return merged


def merge_key_pair(key1: int, key2: int) -> int:
    """Pack two 32-bit keys into one 64-bit key."""
    limit = 1 << 32
    if not (0 <= key1 < limit and 0 <= key2 < limit):
        raise ValueError("keys must fit in 32 bits")
    return (key1 << 32) | key2


def merge_key_triple(key1: int, key2: int, key3: int) -> int:
    """Pack three 21-bit keys into one 64-bit key."""
    limit = 1 << 21
    if not all(0 <= k < limit for k in (key1, key2, key3)):
        raise ValueError("keys must fit in 21 bits")
    return (key1 << 42) | (key2 << 21) | key3


def get_wall_clock() -> int:
    """Wall-clock time in nanoseconds since the epoch."""
    return time.time_ns()


def get_server_clock() -> int:
    """High-resolution monotonic time in nanoseconds."""
    return time.monotonic_ns()


def get_sys_clock(time_enable: bool = True) -> int:
    """Server clock in nanoseconds, or 0 when timing is disabled."""
    if time_enable:
        return get_server_clock()
    return 0