import logging

import pytest

from picobot.platform import BootClock, HeapMonitor, random_bits, rng_seed


def make_clock(*readings):
    values = iter(readings)
    return BootClock(clock=lambda: next(values))


def test_boot_clock_reports_elapsed_time():
    boot = 10**9
    clock = make_clock(boot, boot + 3_500_000_000, boot + 3_500_000_000)
    assert clock.ms_since_boot() == 3500
    assert clock.low_res_timer() == 3


def test_boot_clock_units_agree():
    boot = 5
    later = boot + 7_654_321_000
    clock = make_clock(boot, later, later, later)
    us = clock.us_since_boot()
    ms = clock.ms_since_boot()
    assert us // 1000 == ms
    assert clock.low_res_timer() == ms // 1000


def test_real_clock_is_monotonic():
    clock = BootClock()
    first = clock.us_since_boot()
    assert clock.us_since_boot() >= first >= 0


@pytest.mark.parametrize("n", [1, 8, 16, 32])
def test_random_bits_in_range(n):
    for _ in range(50):
        assert 0 <= random_bits(n) < 2**n


def test_random_bits_zero():
    assert random_bits(0) == 0


@pytest.mark.parametrize("n", [-1, 33])
def test_random_bits_rejects_bad_width(n):
    with pytest.raises(ValueError):
        random_bits(n)


def test_rng_seed_is_32_bit():
    assert 0 <= rng_seed() < 2**32


def test_allocate_and_free_round_trip():
    heap = HeapMonitor(total=10_000)
    left = heap.allocate(100)
    assert left == heap.total - 100
    assert heap.free(100) == heap.total
    assert heap.successful_allocations == 1
    assert heap.successful_frees == 1


def test_allocate_beyond_heap_raises():
    heap = HeapMonitor(total=2_000)
    with pytest.raises(MemoryError):
        heap.allocate(2_001)
    assert heap.allocated == 0


def test_free_more_than_allocated_raises():
    heap = HeapMonitor(total=2_000)
    heap.allocate(10)
    with pytest.raises(ValueError):
        heap.free(11)


def test_reallocate_replaces_block():
    heap = HeapMonitor(total=50_000)
    heap.allocate(300)
    heap.reallocate(300, 700)
    assert heap.allocated == 700


def test_low_heap_warns(caplog):
    heap = HeapMonitor(total=5_000)
    with caplog.at_level(logging.WARNING, logger="picobot.platform"):
        heap.allocate(3_000)
    assert any("3000" in message for message in caplog.messages)


def test_plenty_of_heap_is_quiet(caplog):
    heap = HeapMonitor(total=100_000)
    with caplog.at_level(logging.WARNING, logger="picobot.platform"):
        heap.allocate(10)
    assert caplog.messages == []


def test_bad_heap_size():
    with pytest.raises(ValueError):
        HeapMonitor(total=0)