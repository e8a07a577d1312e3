"""Statistics for all threads of a node, with process memory and CPU reports."""

from __future__ import annotations

import os
import re
import sys
from typing import Callable, List, Optional, TextIO

from .config import Config
from .thread_stats import ThreadStats

STATUS_PATH = "/proc/self/status"

_DIGITS = re.compile(r"\d+")


def parse_status_line(line: str) -> int:
    """Return the first integer on a /proc status line such as "VmRSS:  1234 kB"."""
    match = _DIGITS.search(line)
    if match is None:
        raise ValueError(f"no number in status line {line!r}")
    return int(match.group())


class Stats:
    """Per-thread statistics of one node and their combined reports."""

    def __init__(self, config: Config, thread_cnt: int) -> None:
        self.config = config
        self.threads: List[ThreadStats] = []
        self.totals: Optional[ThreadStats] = None
        self.last_cpu = 0.0
        self.last_sys_cpu = 0.0
        self.last_user_cpu = 0.0
        if not config.stats_enable:
            return
        self.threads = [ThreadStats(config) for _ in range(thread_cnt)]
        self.totals = ThreadStats(config)

    def clear(self, tid: int) -> None:
        """Reset the figures of one thread."""
        if not self.config.stats_enable:
            return
        self.threads[tid].clear()

    def _combine(self) -> ThreadStats:
        assert self.totals is not None
        self.totals.clear()
        for thread in self.threads:
            self.totals.combine(thread)
        return self.totals

    def print_client(
        self,
        prog: bool,
        out: Optional[TextIO] = None,
        inflight: Optional[Callable[[int], int]] = None,
    ) -> None:
        """Write the client report; in progress mode also each server's in-flight count."""
        out = sys.stdout if out is None else out
        out.flush()
        if not self.config.stats_enable:
            return
        totals = self._combine()
        out.write("[prog] " if prog else "[summary] ")
        out.write(totals.format_client(prog))
        self.mem_util(out)
        self.cpu_util(out)
        if prog:
            out.write("\n")
            if inflight is not None:
                for node in range(self.config.servers_per_client):
                    out.write(f"tif_node{node}={inflight(node)}, ")
            out.write("\n")
        out.flush()

    def print(self, prog: bool, out: Optional[TextIO] = None) -> None:
        """Write the server report, including each worker thread's idle time."""
        out = sys.stdout if out is None else out
        out.flush()
        if not self.config.stats_enable:
            return
        totals = self._combine()
        idle_worker_times = [
            thread.worker_idle_time for thread in self.threads[: self.config.thread_cnt]
        ]
        out.write("[prog] " if prog else "[summary] ")
        out.write(totals.format_server(prog, idle_worker_times))
        self.mem_util(out)
        self.cpu_util(out)
        out.write("\n")
        out.flush()
        out.write("\n")
        out.flush()

    def get_txn_cnts(self) -> int:
        """Transactions counted by the worker and input threads of a server."""
        if not self.config.stats_enable or not self.config.is_server():
            return 0
        limit = self.config.thread_cnt + self.config.rem_thread_cnt
        return sum(thread.txn_cnt for thread in self.threads[:limit])

    def util_init(self) -> None:
        """Take the starting point for CPU utilisation."""
        sample = os.times()
        self.last_cpu = sample.elapsed
        self.last_sys_cpu = sample.system
        self.last_user_cpu = sample.user

    def mem_util(self, out: TextIO) -> None:
        """Write the process's resident and virtual memory in kB, where known."""
        try:
            with open(STATUS_PATH, encoding="utf-8") as status:
                lines = status.readlines()
        except OSError:
            return
        for line in lines:
            if line.startswith("VmRSS:"):
                out.write(f"phys_mem_usage={parse_status_line(line)}\n")
            if line.startswith("VmSize:"):
                out.write(f"virt_mem_usage={parse_status_line(line)}\n")

    def cpu_util(self, out: TextIO) -> None:
        """Write CPU use since the last sample as a percentage per thread; -1 if unknown."""
        sample = os.times()
        if (
            sample.elapsed <= self.last_cpu
            or sample.system < self.last_sys_cpu
            or sample.user < self.last_user_cpu
        ):
            percent = -1.0
        else:
            percent = (sample.system - self.last_sys_cpu) + (
                sample.user - self.last_user_cpu
            )
            percent /= sample.elapsed - self.last_cpu
            if self.config.is_server():
                percent /= self.config.total_thread_cnt
            elif self.config.is_client():
                percent /= self.config.total_client_thread_cnt
            percent *= 100
        out.write(f",cpu_ttl={percent:f}")
        self.last_cpu = sample.elapsed
        self.last_sys_cpu = sample.system
        self.last_user_cpu = sample.user