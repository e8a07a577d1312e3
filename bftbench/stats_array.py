"""Growable arrays of samples used for latency statistics."""

from __future__ import annotations

import threading
from enum import Enum
from typing import List


class StatsArrType(Enum):
    """How values are recorded: as a histogram or as a list of samples."""

    ARR_INSERT = 0
    ARR_INCR = 1


class StatsArr:
    """Thread-safe sample store.

    In ARR_INCR mode every inserted value is stored in order and the array
    doubles when full. In ARR_INSERT mode the value is a bucket index whose
    counter is incremented; values beyond the last bucket go into it.
    """

    def __init__(self, size: int, arr_type: StatsArrType) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self.arr: List[int] = [0] * (size + 1)
        self.size = size + 1
        self.type = arr_type
        self.cnt = 0
        self._lock = threading.Lock()

    def clear(self) -> None:
        """Forget the recorded count."""
        self.cnt = 0

    def sort(self) -> None:
        """Sort the recorded samples in ascending order."""
        with self._lock:
            self.arr[: self.cnt] = sorted(self.arr[: self.cnt])

    def resize(self) -> None:
        """Double the storage, filling the new half with zeros."""
        self.arr.extend([0] * self.size)
        self.size *= 2

    def insert(self, item: int) -> None:
        """Record one value."""
        with self._lock:
            if self.type is StatsArrType.ARR_INCR:
                if self.cnt == self.size:
                    self.resize()
                self.arr[self.cnt] = item
                self.cnt += 1
            else:
                bucket = self.size - 1 if item >= self.size else item
                self.arr[bucket] += 1
                self.cnt += 1

    def append(self, other: "StatsArr") -> None:
        """Insert every recorded value of other, in order."""
        for value in other.arr[: other.cnt]:
            self.insert(value)

    def format(self) -> str:
        """Samples as "v,v,..." or, for histograms, non-empty buckets as "i=n,"."""
        if self.type is StatsArrType.ARR_INCR:
            return "".join(f"{value}," for value in self.arr[: self.cnt])
        return "".join(
            f"{idx}={value}," for idx, value in enumerate(self.arr[: self.size]) if value > 0
        )

    def format_range(self, min_perc: int, max_perc: int) -> str:
        """Samples between two percentages of the count; empty for histograms."""
        if self.type is not StatsArrType.ARR_INCR:
            return ""
        start = min_perc * self.cnt // 100
        end = max_perc * self.cnt // 100
        return "".join(f"{value}," for value in self.arr[start:end])

    def get_percentile(self, ile: int) -> int:
        """Value at the given percentile; the samples should be sorted first."""
        return self[ile * self.cnt // 100]

    def average(self) -> int:
        """Integer mean of the recorded samples, 0 when there are none."""
        if self.cnt == 0:
            return 0
        return sum(self.arr[: self.cnt]) // self.cnt

    def __getitem__(self, idx: int) -> int:
        if not 0 <= idx < self.size:
            raise IndexError(f"index {idx} out of range for size {self.size}")
        return self.arr[idx]

    def __len__(self) -> int:
        return self.cnt