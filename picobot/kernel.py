"""Scheduler configuration and fatal kernel hooks."""

from __future__ import annotations

import sys
from dataclasses import dataclass

__all__ = [
    "KernelConfig",
    "KernelFault",
    "StackOverflowError",
    "AssertFailedError",
    "stack_overflow_hook",
    "assert_called",
]

_BANNER = "-" * 46


@dataclass(frozen=True)
class KernelConfig:
    """Scheduler, memory and timer settings of the real-time kernel."""

    use_preemption: bool = True
    use_time_slicing: bool = True
    idle_should_yield: bool = True
    tick_rate_hz: int = 1000
    max_priorities: int = 32
    minimal_stack_size: int = 256
    use_mutexes: bool = True
    use_recursive_mutexes: bool = True
    use_counting_semaphores: bool = True
    queue_registry_size: int = 8
    num_thread_local_storage_pointers: int = 5
    support_static_allocation: bool = True
    support_dynamic_allocation: bool = True
    total_heap_size: int = 128 * 1024
    check_for_stack_overflow: int = 1
    use_trace_facility: bool = True
    use_timers: bool = True
    timer_queue_length: int = 10
    timer_task_stack_depth: int = 1024
    number_of_cores: int = 1
    tick_core: int = 0

    def __post_init__(self) -> None:
        if self.tick_rate_hz <= 0:
            raise ValueError("tick rate must be positive")
        if self.max_priorities < 1:
            raise ValueError("at least one priority level is required")
        if self.minimal_stack_size <= 0 or self.timer_task_stack_depth <= 0:
            raise ValueError("stack sizes must be positive")
        if self.total_heap_size <= 0:
            raise ValueError("heap size must be positive")
        if not 0 <= self.tick_core < self.number_of_cores:
            raise ValueError("tick core must be one of the configured cores")

    @property
    def timer_task_priority(self) -> int:
        """Priority of the timer service task: the highest available."""
        return self.max_priorities - 1

    def ms_to_ticks(self, ms: int) -> int:
        """Convert milliseconds to whole ticks, rounding down."""
        if ms < 0:
            raise ValueError("duration must not be negative")
        return (int(ms) * self.tick_rate_hz) // 1000

    def ticks_to_seconds(self, ticks: int) -> float:
        """Convert a tick count to seconds."""
        if ticks < 0:
            raise ValueError("tick count must not be negative")
        return ticks / self.tick_rate_hz

    def idle_task_stack_size(self) -> int:
        """Stack depth, in words, given to the idle task."""
        return self.minimal_stack_size

    def timer_task_stack_size(self) -> int:
        """Stack depth, in words, given to the timer service task."""
        return self.timer_task_stack_depth


class KernelFault(RuntimeError):
    """An unrecoverable kernel condition."""


class StackOverflowError(KernelFault):
    """A task has overrun its stack."""

    def __init__(self, task_name: str) -> None:
        super().__init__(f"STACK OVERFLOW on {task_name}")
        self.task_name = task_name


class AssertFailedError(KernelFault):
    """A kernel assertion did not hold."""

    def __init__(self, filename: str, line: int) -> None:
        super().__init__(f"ASSERT FAILED {filename} line: {line}")
        self.filename = filename
        self.line = line


def _report(message: str) -> None:
    print(_BANNER, message, _BANNER, sep="\n", file=sys.stdout)


def stack_overflow_hook(task_name: str) -> None:
    """Report a stack overflow in ``task_name`` and halt by raising."""
    error = StackOverflowError(task_name)
    _report(str(error))
    raise error


def assert_called(filename: str, line: int) -> None:
    """Report a failed assertion at ``filename``:``line`` and halt by raising."""
    error = AssertFailedError(filename, line)
    _report(str(error))
    raise error