"""Per-thread statistics counters and their text reports."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .config import BILLION, Config, MessageType
from .stats_array import StatsArr, StatsArrType

_LATENCY_PERCENTILES = (1, 10, 25, 50, 75, 90, 95, 96, 97, 98, 99)

_SUMMED_COUNTS = (
    "parts_touched",
    "txn_cnt",
    "remote_txn_cnt",
    "local_txn_cnt",
    "local_txn_start_cnt",
    "total_txn_commit_cnt",
    "local_txn_commit_cnt",
    "remote_txn_commit_cnt",
    "total_txn_abort_cnt",
    "unique_txn_abort_cnt",
    "local_txn_abort_cnt",
    "remote_txn_abort_cnt",
    "multi_part_txn_cnt",
    "single_part_txn_cnt",
    "txn_write_cnt",
    "record_write_cnt",
    "txn_sent_cnt",
    "work_queue_cnt",
    "work_queue_enq_cnt",
    "work_queue_new_cnt",
    "work_queue_old_cnt",
    "work_queue_conflict_cnt",
    "worker_process_cnt",
    "msg_queue_cnt",
    "msg_queue_enq_cnt",
    "msg_batch_cnt",
    "msg_batch_size_msgs",
    "msg_batch_size_bytes",
    "msg_batch_size_bytes_to_server",
    "msg_batch_size_bytes_to_client",
    "msg_send_cnt",
    "msg_recv_cnt",
    "txn_table_new_cnt",
    "txn_table_get_cnt",
    "txn_table_release_cnt",
    "txn_table_cflt_cnt",
    "txn_table_cflt_size",
)

_LATENCY_TIMES = (
    "lat_work_queue_time",
    "lat_msg_queue_time",
    "lat_cc_block_time",
    "lat_cc_time",
    "lat_process_time",
    "lat_abort_time",
    "lat_network_time",
    "lat_other_time",
    "lat_l_loc_work_queue_time",
    "lat_l_loc_msg_queue_time",
    "lat_l_loc_cc_block_time",
    "lat_l_loc_cc_time",
    "lat_l_loc_process_time",
    "lat_l_loc_abort_time",
    "lat_short_work_queue_time",
    "lat_short_msg_queue_time",
    "lat_short_cc_block_time",
    "lat_short_cc_time",
    "lat_short_process_time",
    "lat_short_network_time",
    "lat_short_batch_time",
    "lat_s_loc_work_queue_time",
    "lat_s_loc_msg_queue_time",
    "lat_s_loc_cc_block_time",
    "lat_s_loc_cc_time",
    "lat_s_loc_process_time",
    "lat_l_rem_work_queue_time",
    "lat_l_rem_msg_queue_time",
    "lat_l_rem_cc_block_time",
    "lat_l_rem_cc_time",
    "lat_l_rem_process_time",
    "lat_s_rem_work_queue_time",
    "lat_s_rem_msg_queue_time",
    "lat_s_rem_cc_block_time",
    "lat_s_rem_cc_time",
    "lat_s_rem_process_time",
)

_SUMMED_TIMES = (
    "txn_run_time",
    "multi_part_txn_run_time",
    "single_part_txn_run_time",
    "ts_alloc_time",
    "abort_time",
    "txn_manager_time",
    "txn_index_time",
    "txn_validate_time",
    "txn_cleanup_time",
    "time_pre_prepare",
    "time_prepare",
    "time_commit",
    "time_execute",
    "tput_msg",
    "msg_cl_in",
    "msg_node_in",
    "msg_cl_out",
    "msg_node_out",
    "txn_total_process_time",
    "txn_process_time",
    "txn_total_local_wait_time",
    "txn_local_wait_time",
    "txn_total_remote_wait_time",
    "txn_remote_wait_time",
    "cl_send_intv",
    "work_queue_wait_time",
    "work_queue_mtx_wait_time",
    "work_queue_new_wait_time",
    "work_queue_old_wait_time",
    "work_queue_enqueue_time",
    "work_queue_dequeue_time",
    "worker_idle_time",
    "worker_activate_txn_time",
    "worker_deactivate_txn_time",
    "worker_release_msg_time",
    "worker_process_time",
    "msg_queue_delay_time",
    "msg_send_time",
    "msg_recv_time",
    "msg_recv_idle_time",
    "msg_unpack_time",
    "mbuf_send_intv_time",
    "msg_copy_output_time",
    "txn_table_get_time",
    "txn_table_release_time",
    "txn_table_min_ts_time",
) + _LATENCY_TIMES

# Recorded once per run and neither cleared nor combined.
_MESSAGE_SIZES = (
    "bytes_received",
    "bytes_sent",
    "client_batch_msg_size",
    "batch_req_msg_size",
    "commit_msg_size",
    "prepare_msg_size",
    "checkpoint_msg_size",
    "client_response_msg_size",
)

_SIZE_FIELD_BY_TYPE = {
    MessageType.CL_RSP: "client_response_msg_size",
    MessageType.CL_BATCH: "client_batch_msg_size",
    MessageType.BATCH_REQ: "batch_req_msg_size",
    MessageType.PBFT_CHKPT_MSG: "checkpoint_msg_size",
    MessageType.PBFT_COMMIT_MSG: "commit_msg_size",
    MessageType.PBFT_PREP_MSG: "prepare_msg_size",
}


def _secs(value: float) -> str:
    return f"{value / BILLION:f}"


class ThreadStats:
    """Counters and timings collected by one thread."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.part_cnt: List[int] = [0] * config.part_cnt
        self.part_acc: List[int] = [0] * config.part_cnt
        no_msg = int(MessageType.NO_MSG)
        self.worker_process_cnt_by_type: List[int] = [0] * no_msg
        self.worker_process_time_by_type: List[float] = [0.0] * no_msg
        io_threads = (
            config.send_thread_cnt + config.rem_thread_cnt
            if config.time_prof_enable
            else 0
        )
        self.io_thread_idle_time: List[float] = [0.0] * io_threads
        self.client_client_latency = StatsArr(config.max_txn_per_part, StatsArrType.ARR_INCR)
        for name in _MESSAGE_SIZES:
            setattr(self, name, 0)
        self.total_runtime = 0.0
        self.clear()

    def clear(self) -> None:
        """Reset every counter and timing recorded during a run."""
        self.total_runtime = 0.0
        for name in _SUMMED_COUNTS:
            setattr(self, name, 0)
        for name in _SUMMED_TIMES:
            setattr(self, name, 0.0)
        self.worker_process_cnt_by_type[:] = [0] * len(self.worker_process_cnt_by_type)
        self.worker_process_time_by_type[:] = [0.0] * len(self.worker_process_time_by_type)
        self.io_thread_idle_time[:] = [0.0] * len(self.io_thread_idle_time)
        self.client_client_latency.clear()

    def combine(self, other: "ThreadStats") -> None:
        """Add another thread's figures to these; runtime takes the maximum."""
        if other.total_runtime > self.total_runtime:
            self.total_runtime = other.total_runtime
        self.client_client_latency.append(other.client_client_latency)
        for name in _SUMMED_COUNTS + _SUMMED_TIMES:
            setattr(self, name, getattr(self, name) + getattr(other, name))
        self.worker_process_cnt_by_type = [
            a + b
            for a, b in zip(self.worker_process_cnt_by_type, other.worker_process_cnt_by_type)
        ]
        self.worker_process_time_by_type = [
            a + b
            for a, b in zip(self.worker_process_time_by_type, other.worker_process_time_by_type)
        ]
        self.io_thread_idle_time = [
            a + b for a, b in zip(self.io_thread_idle_time, other.io_thread_idle_time)
        ]

    def _io_idle_lines(self, sep: str = "") -> Iterable[str]:
        if not self.config.time_prof_enable:
            return []
        return [
            f",io_thd_idle_time_{i}={_secs(t)}{sep}"
            for i, t in enumerate(self.io_thread_idle_time)
        ]

    def format_client(self, prog: bool) -> str:
        """Client report as one comma-separated line; latency percentiles unless prog."""
        txn_run_avg_time = self.txn_run_time / self.txn_cnt if self.txn_cnt > 0 else 0.0
        tput = (
            self.txn_cnt / (self.total_runtime / BILLION) if self.total_runtime > 0 else 0.0
        )
        parts = [
            f"total_runtime={_secs(self.total_runtime)}",
            f",tput={tput:f}",
            f",txn_cnt={self.txn_cnt}",
            f",txn_sent_cnt={self.txn_sent_cnt}",
            f",txn_run_time={_secs(self.txn_run_time)}",
            f",txn_run_avg_time={_secs(txn_run_avg_time)}",
            f",cl_send_intv={_secs(self.cl_send_intv)}",
        ]

        msg_queue_delay_time_avg = (
            self.msg_queue_delay_time / self.msg_queue_cnt if self.msg_queue_cnt > 0 else 0.0
        )
        mbuf_send_intv_time_avg = 0.0
        msg_batch_size_msgs_avg = 0.0
        msg_batch_size_bytes_avg = 0.0
        if self.msg_batch_cnt > 0:
            mbuf_send_intv_time_avg = self.mbuf_send_intv_time / self.msg_batch_cnt
            msg_batch_size_msgs_avg = float(self.msg_batch_size_msgs // self.msg_batch_cnt)
            msg_batch_size_bytes_avg = float(self.msg_batch_size_bytes // self.msg_batch_cnt)
        msg_recv_time_avg = 0.0
        msg_unpack_time_avg = 0.0
        if self.msg_recv_cnt > 0:
            msg_recv_time_avg = self.msg_recv_time / self.msg_recv_cnt
            msg_unpack_time_avg = self.msg_unpack_time / self.msg_recv_cnt
        msg_send_time_avg = (
            self.msg_send_time / self.msg_send_cnt if self.msg_send_cnt > 0 else 0.0
        )
        parts += [
            f",msg_queue_delay_time={_secs(self.msg_queue_delay_time)}",
            f",msg_queue_cnt={self.msg_queue_cnt}",
            f",msg_queue_enq_cnt={self.msg_queue_enq_cnt}",
            f",msg_queue_delay_time_avg={_secs(msg_queue_delay_time_avg)}",
            f",msg_send_time={_secs(self.msg_send_time)}",
            f",msg_send_time_avg={_secs(msg_send_time_avg)}",
            f",msg_recv_time={_secs(self.msg_recv_time)}",
            f",msg_recv_time_avg={_secs(msg_recv_time_avg)}",
            f",msg_recv_idle_time={_secs(self.msg_recv_idle_time)}",
            f",msg_batch_cnt={self.msg_batch_cnt}",
            f",msg_batch_size_msgs={self.msg_batch_size_msgs}",
            f",msg_batch_size_msgs_avg={msg_batch_size_msgs_avg:f}",
            f",msg_batch_size_bytes={self.msg_batch_size_bytes}",
            f",msg_batch_size_bytes_avg={msg_batch_size_bytes_avg:f}",
            f",msg_batch_size_bytes_to_server={self.msg_batch_size_bytes_to_server}",
            f",msg_batch_size_bytes_to_client={self.msg_batch_size_bytes_to_client}",
            f",msg_send_cnt={self.msg_send_cnt}",
            f",msg_recv_cnt={self.msg_recv_cnt}",
            f",msg_unpack_time={_secs(self.msg_unpack_time)}",
            f",msg_unpack_time_avg={_secs(msg_unpack_time_avg)}",
            f",mbuf_send_intv_time={_secs(self.mbuf_send_intv_time)}",
            f",mbuf_send_intv_time_avg={_secs(mbuf_send_intv_time_avg)}",
            f",msg_copy_output_time={_secs(self.msg_copy_output_time)}",
        ]
        parts.extend(self._io_idle_lines())

        if not prog:
            latency = self.client_client_latency
            latency.sort()
            parts.append(f",ccl0={_secs(latency[0])}")
            parts.extend(
                f",ccl{p}={_secs(latency.get_percentile(p))}" for p in _LATENCY_PERCENTILES
            )
            parts.append(f",ccl100={_secs(latency[max(latency.cnt - 1, 0)])}")
        return "".join(parts)

    def format_server(self, prog: bool, idle_worker_times: Optional[Sequence[float]] = None) -> str:
        """Server report, one figure per line, with each worker's idle time."""
        tput = (
            self.txn_cnt / (self.total_runtime / BILLION) if self.total_runtime > 0 else 0.0
        )
        work_queue_wait_avg_time = (
            self.work_queue_wait_time / self.work_queue_cnt if self.work_queue_cnt > 0 else 0.0
        )
        parts = [
            f"\ntotal_runtime={_secs(self.total_runtime)}\n",
            f"\ntput={tput:f}\ntxn_cnt={self.txn_cnt}\n",
            f",work_queue_wait_time={_secs(self.work_queue_wait_time)}\n",
            f",work_queue_cnt={self.work_queue_cnt}\n",
            f",work_queue_enq_cnt={self.work_queue_enq_cnt}\n",
            f",work_queue_wait_avg_time={_secs(work_queue_wait_avg_time)}\n",
            f",work_queue_enqueue_time={_secs(self.work_queue_enqueue_time)}\n",
            f",work_queue_dequeue_time={_secs(self.work_queue_dequeue_time)}\n",
            f",worker_idle_time={_secs(self.worker_idle_time)}\n",
            f",worker_release_msg_time={_secs(self.worker_release_msg_time)}\n",
        ]
        parts.extend(
            f"idle_time_worker {i}={_secs(t)}\n"
            for i, t in enumerate(idle_worker_times or ())
        )

        msg_recv_time_avg = (
            self.msg_recv_time / self.msg_recv_cnt if self.msg_recv_cnt > 0 else 0.0
        )
        msg_send_time_avg = (
            self.msg_send_time / self.msg_send_cnt if self.msg_send_cnt > 0 else 0.0
        )
        parts += [
            f"msg_send_time={_secs(self.msg_send_time)}\n",
            f"msg_send_time_avg={_secs(msg_send_time_avg)}\n",
            f"msg_recv_time={_secs(self.msg_recv_time)}\n",
            f"msg_recv_time_avg={_secs(msg_recv_time_avg)}\n",
            f"msg_recv_idle_time={_secs(self.msg_recv_idle_time)}\n",
            f"msg_send_cnt={self.msg_send_cnt}\n",
            f"msg_recv_cnt={self.msg_recv_cnt}\n",
            f"bytes_received={self.bytes_received}\n",
            f"bytes_sent={self.bytes_sent}\n",
            f"msg_size_client_batch={self.client_batch_msg_size}\n",
            f"msg_size_batch_req={self.batch_req_msg_size}\n",
            f"msg_size_commit={self.commit_msg_size}\n",
            f"msg_size_prepare={self.prepare_msg_size}\n",
            f"msg_size_checkpoint={self.checkpoint_msg_size}\n",
            f"msg_size_client_response={self.client_response_msg_size}\n",
        ]
        parts.extend(self._io_idle_lines())

        txn_table_get_avg_time = (
            self.txn_table_get_time / self.txn_table_get_cnt
            if self.txn_table_get_cnt > 0
            else 0.0
        )
        txn_table_release_avg_time = (
            self.txn_table_release_time / self.txn_table_release_cnt
            if self.txn_table_release_cnt > 0
            else 0.0
        )
        parts += [
            f"txn_table_new_cnt={self.txn_table_new_cnt}\n",
            f"txn_table_get_cnt={self.txn_table_get_cnt}\n",
            f"txn_table_release_cnt={self.txn_table_release_cnt}\n",
            f"txn_table_cflt_cnt={self.txn_table_cflt_cnt}\n",
            f"txn_table_cflt_size={self.txn_table_cflt_size}\n",
            f"txn_table_get_time={_secs(self.txn_table_get_time)}\n",
            f"txn_table_release_time={_secs(self.txn_table_release_time)}\n",
            f"txn_table_min_ts_time={_secs(self.txn_table_min_ts_time)}\n",
            f"txn_table_get_avg_time={_secs(txn_table_get_avg_time)}\n",
            f"txn_table_release_avg_time={_secs(txn_table_release_avg_time)}\n",
        ]
        return "".join(parts)

    def set_message_size(self, rtype: int, size: int) -> None:
        """Remember the size of a message of the given type; other types are ignored."""
        try:
            name = _SIZE_FIELD_BY_TYPE[MessageType(rtype)]
        except (ValueError, KeyError):
            return
        setattr(self, name, size)