"""Active objects that run their own loop in a background thread."""

from __future__ import annotations

import abc
import threading

from picobot.kernel import KernelConfig

__all__ = ["MAX_NAME_LEN", "Agent"]

MAX_NAME_LEN = 20
_PRIORITY_LIMIT = KernelConfig().max_priorities


class Agent(abc.ABC):
    """Runs :meth:`run` in its own thread between :meth:`start` and :meth:`stop`."""

    join_timeout = 5.0

    def __init__(self) -> None:
        self.name = ""
        self.priority = 0
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    def __enter__(self) -> Agent:
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()

    def start(self, name: str, priority: int = 0) -> bool:
        """Start the agent's thread; names are cut to fit ``MAX_NAME_LEN``."""
        if self.is_running():
            raise RuntimeError(f"agent {self.name!r} is already running")
        if not 0 <= priority < _PRIORITY_LIMIT:
            raise ValueError(f"priority must be between 0 and {_PRIORITY_LIMIT - 1}")
        self.name = name[: MAX_NAME_LEN - 1]
        self.priority = priority
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name=self.name, daemon=True)
        self._thread.start()
        return True

    def stop(self) -> None:
        """Ask the run loop to finish and wait for it."""
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        if thread is not threading.current_thread():
            thread.join(self.join_timeout)
        self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True if a stop was requested."""
        return self._stop_event.wait(seconds)

    @abc.abstractmethod
    def run(self) -> None:
        """The agent's main loop; it should return once a stop is requested."""