"""A bot agent that polls the bot API for updates and runs commands."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from picobot.agent import Agent
from picobot.commands import CmdTest, TelegramBotCmd, TelegramBotCmds, TelegramInterface
from picobot.http import HttpClient, HttpError, HttpResponse

__all__ = ["DEFAULT_API_BASE", "TelegramBot"]

_log = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.telegram.org"
UNKNOWN_COMMAND = "Unknown command"


def _nested_id(message: Mapping[str, Any], key: str) -> int:
    section = message.get(key)
    if isinstance(section, Mapping):
        value = section.get("id")
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


class TelegramBot(Agent, TelegramInterface):
    """Polls for updates, dispatches text commands and sends replies."""

    def __init__(
        self,
        token: str,
        client: HttpClient | None = None,
        api_base: str = DEFAULT_API_BASE,
        poll_interval: float = 10.0,
        update_limit: int = 5,
    ) -> None:
        Agent.__init__(self)
        if not token:
            raise ValueError("a bot token is required")
        if poll_interval < 0:
            raise ValueError("poll interval must not be negative")
        if update_limit <= 0:
            raise ValueError("update limit must be positive")
        self._token = token
        self._client = client or HttpClient()
        self.api_base = api_base.rstrip("/")
        self.poll_interval = poll_interval
        self.update_limit = update_limit
        self.commands = TelegramBotCmds()
        self.commands.add_cmd(CmdTest())
        self.offset = 0

    def _url(self, method: str) -> str:
        return f"{self.api_base}/bot{self._token}/{method}"

    def _checked(self, response: HttpResponse) -> bool:
        if response.ok:
            _log.debug("WS: %s", response.text)
            return True
        _log.error("WS Failed %d", response.status_code)
        return False

    def send_message(self, chat_id: int, msg: str) -> bool:
        """Send ``msg`` to chat ``chat_id``; True if the API answered 200."""
        query = {"chat_id": str(chat_id), "text": msg}
        try:
            response = self._client.get(self._url("sendMessage"), query)
        except HttpError as exc:
            _log.error("sendMessage failed: %s", exc)
            return False
        ok = self._checked(response)
        if not ok:
            _log.error("URL: %s", response.url)
        return ok

    def add_cmd(self, cmd: TelegramBotCmd) -> None:
        """Add a command for the bot to respond to."""
        self.commands.add_cmd(cmd)

    def del_cmd(self, cmd: TelegramBotCmd) -> None:
        """Remove a command."""
        self.commands.del_cmd(cmd)

    def is_authorised(self, from_id: int) -> bool:
        """Whether user ``from_id`` may use the bot; every user may."""
        return True

    def send_commands(self) -> bool:
        """Publish the command list; True if the API answered 200."""
        try:
            response = self._client.post_json(self._url("setMyCommands"), self.commands)
        except HttpError as exc:
            _log.error("setMyCommands failed: %s", exc)
            return False
        return self._checked(response)

    def do_update(self) -> bool:
        """Fetch pending updates and act on them; True if the fetch succeeded."""
        query = {"limit": str(self.update_limit)}
        if self.offset != 0:
            query["offset"] = str(self.offset + 1)
        try:
            response = self._client.get(self._url("getUpdates"), query)
        except HttpError as exc:
            _log.error("getUpdates failed: %s", exc)
            return False
        if not self._checked(response):
            return False
        self.handle_updates(response.payload)
        return True

    def handle_updates(self, payload: bytes | str | Mapping[str, Any]) -> int:
        """Act on a getUpdates reply; return the number of updates seen."""
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8", errors="replace")
        if isinstance(payload, str):
            try:
                data = json.loads(payload)
            except json.JSONDecodeError:
                _log.error("update reply is not valid JSON")
                return 0
        else:
            data = payload
        if not isinstance(data, Mapping):
            return 0
        result = data.get("result")
        if not isinstance(result, list):
            return 0

        seen = 0
        for item in result:
            if not isinstance(item, Mapping):
                continue
            seen += 1
            update_id = item.get("update_id")
            if isinstance(update_id, int) and not isinstance(update_id, bool):
                self.offset = update_id
            message = item.get("message")
            if not isinstance(message, Mapping):
                continue
            from_id = _nested_id(message, "from")
            chat_id = _nested_id(message, "chat")
            if not self.is_authorised(from_id):
                continue
            text = message.get("text")
            if isinstance(text, str):
                self._dispatch(text, chat_id)
        return seen

    def _dispatch(self, text: str, chat_id: int) -> None:
        _log.info("Text Command is %s", text)
        cmd = self.commands.get_cmd(text)
        if cmd is not None:
            cmd.execute(self, chat_id)
            return
        _log.info("Unknown cmd %s", text)
        if chat_id != 0:
            self.send_message(chat_id, UNKNOWN_COMMAND)

    def run(self) -> None:
        """Publish the commands, then poll for updates until stopped."""
        self.send_commands()
        while not self.stop_requested:
            self.do_update()
            if self.wait(self.poll_interval):
                break