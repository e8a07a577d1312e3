import pytest

from bftbench.config import RC, UINT64_MAX, Config
from bftbench.ycsb import (
    YCSBQuery,
    YCSBQueryGenerator,
    YCSBRequest,
    YCSBTxnManager,
    YCSBWorkload,
    zeta,
)


def _config(**kwargs):
    base = dict(synth_table_size=1000, req_per_query=5)
    base.update(kwargs)
    return Config(**base)


def test_zeta_with_zero_theta_counts_terms():
    for n in (1, 5, 17):
        assert zeta(n, 0.0) == pytest.approx(n)


def test_zeta_single_term_is_one():
    assert zeta(1, 0.5) == 1.0


def test_zeta_increases_with_n():
    assert zeta(10, 0.5) < zeta(11, 0.5)


def test_query_keys_lie_in_table():
    config = _config()
    gen = YCSBQueryGenerator(config, seed=42)
    for _ in range(200):
        query = gen.create_query()
        assert len(query.requests) == config.req_per_query
        for req in query.requests:
            assert 1 <= req.key < config.synth_table_size


def test_same_seed_same_queries():
    config = _config()
    a = YCSBQueryGenerator(config, seed=7)
    b = YCSBQueryGenerator(config, seed=7)
    assert [a.create_query().requests for _ in range(10)] == [
        b.create_query().requests for _ in range(10)
    ]


def test_key_order_sorts_requests():
    gen = YCSBQueryGenerator(_config(key_order=True, req_per_query=20), seed=3)
    keys = [req.key for req in gen.create_query().requests]
    assert keys == sorted(keys)


def test_zipf_skews_towards_small_keys():
    config = _config(zipf_theta=0.9)
    gen = YCSBQueryGenerator(config, seed=11)
    keys = [gen.zipf(gen.the_n, 0.9) for _ in range(2000)]
    low = sum(1 for k in keys if k <= 100)
    assert low > len(keys) // 2


def test_zipf_rejects_other_range():
    gen = YCSBQueryGenerator(_config(), seed=1)
    with pytest.raises(ValueError):
        gen.zipf(gen.the_n + 1, gen.config.zipf_theta)


def test_zipf_rejects_other_theta():
    gen = YCSBQueryGenerator(_config(), seed=1)
    with pytest.raises(ValueError):
        gen.zipf(gen.the_n, 0.25)


def test_generator_rejects_tiny_table():
    with pytest.raises(ValueError):
        YCSBQueryGenerator(_config(synth_table_size=1), seed=1)


def test_query_reset_empties():
    query = YCSBQuery([YCSBRequest(1, 2), YCSBRequest(3, 4)])
    query.reset()
    assert query.requests == []


def test_workload_key_to_part():
    workload = YCSBWorkload(4)
    assert [workload.key_to_part(k) for k in range(6)] == [0, 1, 2, 3, 0, 1]


def test_workload_rejects_zero_partitions():
    with pytest.raises(ValueError):
        YCSBWorkload(0)


def test_run_txn_adds_values():
    store = [0] * 10
    manager = YCSBWorkload(1).create_txn_manager(store)
    query = YCSBQuery([YCSBRequest(2, 5), YCSBRequest(2, 7), YCSBRequest(4, 1)])
    assert manager.run_txn(query) is RC.RCOK
    assert store[2] == 12
    assert store[4] == 1
    assert manager.store is store


def test_run_txn_wraps_at_64_bits():
    store = [UINT64_MAX, 0]
    manager = YCSBTxnManager(YCSBWorkload(1), store)
    manager.run_txn(YCSBQuery([YCSBRequest(0, 3)]))
    assert store[0] == 2


def test_run_txn_records_time():
    manager = YCSBTxnManager(YCSBWorkload(1), [0] * 3)
    manager.run_txn(YCSBQuery([YCSBRequest(1, 1)]))
    assert manager.txn_stats.process_time >= 0
    assert manager.txn_stats.process_time == manager.txn_stats.process_time_short
    assert manager.txn_stats.wait_starttime > 0