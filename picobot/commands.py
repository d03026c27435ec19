"""Bot commands, the interface they reply through, and the command registry."""

from __future__ import annotations

import abc
import json as _json
import logging
from collections.abc import Callable

__all__ = [
    "TelegramInterface",
    "TelegramBotCmd",
    "TelegramBotCmds",
    "CmdTest",
    "CmdTemperature",
    "adc_to_celsius",
]

_log = logging.getLogger(__name__)

_ADC_BITS = 12
_ADC_VREF = 3.3


class TelegramInterface(abc.ABC):
    """Something that can send a text message to a chat."""

    @abc.abstractmethod
    def send_message(self, chat_id: int, msg: str) -> bool:
        """Send ``msg`` to chat ``chat_id``; True on success."""


class TelegramBotCmd(abc.ABC):
    """A command such as ``/test`` that the bot responds to."""

    command_id: str = ""
    description: str = ""

    @abc.abstractmethod
    def execute(self, bot: TelegramInterface, chat_id: int) -> None:
        """Carry out the command, replying to ``chat_id`` through ``bot``."""


class TelegramBotCmds:
    """Commands keyed by their id, kept in id order."""

    def __init__(self) -> None:
        self._cmds: dict[str, TelegramBotCmd] = {}

    def __len__(self) -> int:
        return len(self._cmds)

    def __contains__(self, cmd_id: object) -> bool:
        return cmd_id in self._cmds

    def add_cmd(self, cmd: TelegramBotCmd) -> None:
        """Register ``cmd``, replacing any command with the same id."""
        self._cmds[cmd.command_id] = cmd

    def del_cmd(self, cmd: TelegramBotCmd) -> None:
        """Remove the command with ``cmd``'s id, if present."""
        self._cmds.pop(cmd.command_id, None)

    def get_cmd(self, cmd_id: str) -> TelegramBotCmd | None:
        """Return the command for ``cmd_id`` such as ``"/temp"``, or None."""
        return self._cmds.get(cmd_id)

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        """The command list in the form the bot API's setMyCommands takes."""
        return {
            "commands": [
                {"command": cmd_id, "description": self._cmds[cmd_id].description}
                for cmd_id in sorted(self._cmds)
            ]
        }

    def json(self) -> str:
        """The command list as compact JSON."""
        text = _json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        _log.debug("JSON: %s", text)
        return text


class CmdTest(TelegramBotCmd):
    """Replies with a fixed test message."""

    command_id = "/test"
    description = "Just testing"

    def execute(self, bot: TelegramInterface, chat_id: int) -> None:
        _log.info("Execute Cmd Test")
        bot.send_message(chat_id, "This is a test. See if this works")


def adc_to_celsius(raw: int) -> float:
    """Convert a 12-bit reading of the on-chip temperature sensor to degrees C."""
    if not 0 <= raw < (1 << _ADC_BITS):
        raise ValueError(f"ADC reading must be between 0 and {(1 << _ADC_BITS) - 1}")
    volts = raw * (_ADC_VREF / (1 << _ADC_BITS))
    return 27.0 - (volts - 0.706) / 0.001721


class CmdTemperature(TelegramBotCmd):
    """Replies with the chip temperature read from ``read_adc``."""

    command_id = "/temp"
    description = "Pico's Temperature"

    def __init__(self, read_adc: Callable[[], int]) -> None:
        self._read_adc = read_adc

    def execute(self, bot: TelegramInterface, chat_id: int) -> None:
        temp = adc_to_celsius(self._read_adc())
        bot.send_message(chat_id, f"Pico Temperature {temp:.2f}C")