"""An agent that blinks an LED at a set rate, driven by queued commands."""

from __future__ import annotations

import enum
import logging
import queue
from collections.abc import Callable
from dataclasses import dataclass

from picobot.agent import Agent
from picobot.platform import BootClock

__all__ = ["BLINK_QUEUE_LEN", "BlinkAction", "BlinkAgent"]

_log = logging.getLogger(__name__)

BLINK_QUEUE_LEN = 10
_POLL_SECONDS = 0.01


class BlinkAction(enum.Enum):
    OFF = enum.auto()
    ON = enum.auto()
    SPEED = enum.auto()


@dataclass(frozen=True)
class _BlinkCmd:
    action: BlinkAction
    bpm: int = 0


LedWriter = Callable[[int, bool], None]


class BlinkAgent(Agent):
    """Blinks the LED on ``pad``; ``led(pad, state)`` drives the output."""

    def __init__(self, pad: int = 0, led: LedWriter | None = None) -> None:
        super().__init__()
        self.pad = pad
        self._led = led
        self._queue: queue.Queue[_BlinkCmd] = queue.Queue(BLINK_QUEUE_LEN)
        self.blink_count = 0
        self.led_on = False
        self.blinking = True
        self.last_action = 0
        self.delay_ms = 500

    def _write(self, state: bool) -> None:
        if self._led is not None:
            self._led(self.pad, state)

    def _send(self, cmd: _BlinkCmd) -> bool:
        try:
            self._queue.put_nowait(cmd)
        except queue.Full:
            _log.warning("blink command queue is full")
            return False
        return True

    def set_speed(self, bpm: int) -> bool:
        """Queue a new rate in blinks per minute; False if the queue is full."""
        if bpm <= 0:
            raise ValueError("blinks per minute must be positive")
        return self._send(_BlinkCmd(BlinkAction.SPEED, bpm))

    def blink_on(self) -> bool:
        """Queue a request to start blinking."""
        return self._send(_BlinkCmd(BlinkAction.ON))

    def blink_off(self) -> bool:
        """Queue a request to stop blinking and turn the LED off."""
        return self._send(_BlinkCmd(BlinkAction.OFF))

    def _apply(self, cmd: _BlinkCmd) -> None:
        if cmd.action is BlinkAction.OFF:
            self.blinking = False
            self.led_on = False
            self._write(False)
        elif cmd.action is BlinkAction.ON:
            self.blinking = True
        else:
            self.delay_ms = (60_000 // cmd.bpm) // 2

    def _tick(self, now_ms: int) -> None:
        if self.blinking and now_ms > self.last_action + self.delay_ms:
            self.led_on = not self.led_on
            self._write(self.led_on)
            self.last_action = now_ms
            if not self.led_on:
                self.blink_count += 1

    def step(self, now_ms: int) -> None:
        """Apply at most one pending command, then toggle the LED if it is due."""
        try:
            cmd = self._queue.get_nowait()
        except queue.Empty:
            pass
        else:
            self._apply(cmd)
        self._tick(now_ms)

    def run(self) -> None:
        """Blink until stopped, polling for commands."""
        _log.info("Blink started")
        clock = BootClock()
        self._write(False)
        while not self.stop_requested:
            try:
                cmd = self._queue.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                pass
            else:
                self._apply(cmd)
            self._tick(clock.ms_since_boot())