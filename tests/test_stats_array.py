import threading

import pytest

from bftbench.stats_array import StatsArr, StatsArrType


def make_incr(values, size=10):
    arr = StatsArr(size, StatsArrType.ARR_INCR)
    for v in values:
        arr.insert(v)
    return arr


def test_initial_state():
    arr = StatsArr(4, StatsArrType.ARR_INCR)
    assert arr.size == 5
    assert len(arr) == 0
    assert arr.arr == [0] * 5


def test_incr_insert_keeps_order():
    values = [3, 1, 2]
    arr = make_incr(values)
    assert len(arr) == 3
    assert [arr[i] for i in range(3)] == values
    assert arr.format() == "3,1,2,"


def test_incr_grows_when_full():
    values = list(range(100, 107))
    arr = make_incr(values, size=1)
    assert len(arr) == len(values)
    assert arr.size >= len(values)
    assert [arr[i] for i in range(len(values))] == values


def test_resize_doubles_and_zero_fills():
    arr = make_incr([5, 6], size=1)
    old_size = arr.size
    arr.resize()
    assert arr.size == old_size * 2
    assert arr.arr[old_size:] == [0] * old_size
    assert arr[0] == 5


def test_insert_histogram():
    arr = StatsArr(4, StatsArrType.ARR_INSERT)
    for v in [2, 2, 10, 0]:
        arr.insert(v)
    assert len(arr) == 4
    assert arr[2] == 2
    assert arr[arr.size - 1] == 1
    assert arr[0] == 1
    assert arr.format() == "0=1,2=2,4=1,"


def test_sort_and_percentiles():
    values = list(range(100))[::-1]
    arr = make_incr(values, size=100)
    arr.sort()
    assert [arr[i] for i in range(100)] == sorted(values)
    assert arr.get_percentile(0) == min(values)
    assert arr.get_percentile(50) == 50
    assert arr.get_percentile(99) == 99


def test_percentile_out_of_range():
    arr = make_incr([1, 2], size=1)
    with pytest.raises(IndexError):
        arr.get_percentile(100)


def test_average():
    assert make_incr([7, 7, 7]).average() == 7
    assert StatsArr(3, StatsArrType.ARR_INCR).average() == 0


def test_clear_resets_count():
    arr = make_incr([1, 2, 3])
    arr.clear()
    assert len(arr) == 0
    assert arr.format() == ""
    assert arr.average() == 0


def test_append_combines():
    a = make_incr([1, 2])
    b = make_incr([9, 8, 7])
    a.append(b)
    assert len(a) == 5
    assert [a[i] for i in range(5)] == [1, 2, 9, 8, 7]
    assert len(b) == 3


def test_format_range():
    values = list(range(20))
    arr = make_incr(values, size=20)
    assert arr.format_range(0, 100) == arr.format()
    assert arr.format_range(50, 100) == "".join(f"{v}," for v in values[10:])
    hist = StatsArr(3, StatsArrType.ARR_INSERT)
    hist.insert(1)
    assert hist.format_range(0, 100) == ""


def test_index_errors():
    arr = StatsArr(2, StatsArrType.ARR_INCR)
    assert arr[0] == 0
    assert arr[arr.size - 1] == 0
    with pytest.raises(IndexError):
        arr[arr.size]
    with pytest.raises(IndexError):
        arr[-1]
    assert len(arr) == 0


def test_concurrent_inserts():
    arr = StatsArr(1, StatsArrType.ARR_INCR)

    def worker(base):
        for i in range(500):
            arr.insert(base + i)

    threads = [threading.Thread(target=worker, args=(k * 1000,)) for k in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(arr) == 2000
    recorded = sorted(arr[i] for i in range(len(arr)))
    expected = sorted(k * 1000 + i for k in range(4) for i in range(500))
    assert recorded == expected