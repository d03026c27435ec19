"""Command-line entry point: start the blink agent and the bot, then keep running."""

from __future__ import annotations

import argparse
import logging
import os
import threading
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from picobot.blink import BlinkAgent
from picobot.bot import DEFAULT_API_BASE, TelegramBot
from picobot.commands import CmdTemperature
from picobot.logstack import LogLevel, get_logger

__all__ = ["TOKEN_ENV", "LED_PAD", "TASK_PRIORITY", "build_parser", "main"]

TOKEN_ENV = "TELEGRAMBOTKEY"
LED_PAD = 2
TASK_PRIORITY = 1
_CHECK_SECONDS = 1.0

_log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the parser for the command's options."""
    parser = argparse.ArgumentParser(
        prog="picobot",
        description="Run a chat bot that answers commands, alongside a blinking status LED.",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get(TOKEN_ENV, ""),
        help=f"bot API token (default: ${TOKEN_ENV})",
    )
    parser.add_argument("--api-base", default=DEFAULT_API_BASE, help="bot API base URL")
    parser.add_argument(
        "--poll-interval", type=float, default=10.0, help="seconds between update polls"
    )
    parser.add_argument(
        "--update-limit", type=int, default=5, help="updates fetched per poll"
    )
    parser.add_argument("--led-pad", type=int, default=LED_PAD, help="LED output pad")
    parser.add_argument(
        "--blink-bpm", type=int, default=None, help="LED blinks per minute"
    )
    parser.add_argument(
        "--adc-file",
        type=Path,
        default=None,
        help="file holding a raw 12-bit temperature sensor reading; enables /temp",
    )
    parser.add_argument(
        "--run-for",
        type=float,
        default=None,
        help="stop after this many seconds (default: run until interrupted)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=[level.name for level in LogLevel],
        help="log verbosity",
    )
    return parser


def _file_reader(path: Path) -> Callable[[], int]:
    def read() -> int:
        return int(path.read_text(encoding="ascii").strip())

    return read


def _wait(run_for: float | None) -> None:
    idle = threading.Event()
    deadline = None if run_for is None else time.monotonic() + max(run_for, 0.0)
    while True:
        if deadline is None:
            idle.wait(_CHECK_SECONDS)
            continue
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return
        idle.wait(min(_CHECK_SECONDS, remaining))


def main(argv: Sequence[str] | None = None) -> int:
    """Start the agents and run until interrupted or ``--run-for`` elapses."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.token:
        parser.error(f"a bot token is required: pass --token or set {TOKEN_ENV}")

    get_logger("picobot", args.log_level)

    try:
        blink = BlinkAgent(args.led_pad)
        if args.blink_bpm is not None:
            blink.set_speed(args.blink_bpm)
        bot = TelegramBot(
            args.token,
            api_base=args.api_base,
            poll_interval=args.poll_interval,
            update_limit=args.update_limit,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.adc_file is not None:
        bot.add_cmd(CmdTemperature(_file_reader(args.adc_file)))

    _log.info("Main task started")
    blink.start("Blink", TASK_PRIORITY)
    bot.start("Bot", TASK_PRIORITY)
    try:
        _wait(args.run_for)
    except KeyboardInterrupt:
        _log.info("Interrupted")
    finally:
        bot.stop()
        blink.stop()
    return 0