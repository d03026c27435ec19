"""Boot-relative clocks, hardware-style random bits and heap accounting."""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Callable

from picobot.kernel import KernelConfig

__all__ = ["BootClock", "random_bits", "rng_seed", "HeapMonitor"]

_log = logging.getLogger(__name__)

_MAX_RANDOM_BITS = 32
_LOW_HEAP_FLOOR = 1000


class BootClock:
    """Time elapsed since the clock was created, the way a device counts from boot."""

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self._clock = clock
        self._boot_ns = clock()

    def _elapsed_ns(self) -> int:
        return self._clock() - self._boot_ns

    def us_since_boot(self) -> int:
        """Microseconds since boot."""
        return self._elapsed_ns() // 1_000

    def ms_since_boot(self) -> int:
        """Milliseconds since boot."""
        return self._elapsed_ns() // 1_000_000

    def low_res_timer(self) -> int:
        """Whole seconds since boot."""
        return self.ms_since_boot() // 1000


def random_bits(n: int) -> int:
    """Return a random number of ``n`` bits, so in ``[0, 2**n)``; ``n`` is 0 to 32."""
    if not 0 <= n <= _MAX_RANDOM_BITS:
        raise ValueError(f"bit count must be between 0 and {_MAX_RANDOM_BITS}, not {n}")
    if n == 0:
        return 0
    return secrets.randbits(n)


def rng_seed() -> int:
    """Return a 32-bit seed for a random number generator."""
    return random_bits(_MAX_RANDOM_BITS)


class HeapMonitor:
    """Accounts for allocations from a fixed heap and warns when it runs low."""

    def __init__(self, total: int = KernelConfig().total_heap_size) -> None:
        if total <= 0:
            raise ValueError("heap size must be positive")
        self.total = total
        self.allocated = 0
        self.successful_allocations = 0
        self.successful_frees = 0

    @property
    def available(self) -> int:
        """Bytes of heap not yet allocated."""
        return self.total - self.allocated

    def allocate(self, n: int) -> int:
        """Allocate ``n`` bytes and return the bytes left available."""
        if n < 0:
            raise ValueError("allocation size must not be negative")
        available = self.available
        if available < n * 2 or available < _LOW_HEAP_FLOOR:
            _log.warning("allocation of %d bytes with %d bytes of heap available", n, available)
        if n > available:
            raise MemoryError(f"cannot allocate {n} bytes: {available} available")
        self.allocated += n
        self.successful_allocations += 1
        return self.available

    def free(self, n: int) -> int:
        """Return ``n`` bytes to the heap and return the bytes now available."""
        if not 0 <= n <= self.allocated:
            raise ValueError(f"cannot free {n} bytes: {self.allocated} allocated")
        self.allocated -= n
        self.successful_frees += 1
        return self.available

    def reallocate(self, old: int, n: int) -> int:
        """Free a block of ``old`` bytes, then allocate ``n``."""
        self.free(old)
        return self.allocate(n)