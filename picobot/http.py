"""A small HTTP client with the device's network timeouts."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

__all__ = ["HttpSettings", "HttpError", "HttpResponse", "HttpClient"]


@dataclass(frozen=True)
class HttpSettings:
    """Network timing and buffer settings."""

    recv_retry_timeout_ms: int = 2000
    send_retry_timeout_ms: int = 250
    tcp_mss: int = 1460
    recv_bufsize: int = 256

    def __post_init__(self) -> None:
        if self.recv_retry_timeout_ms <= 0 or self.send_retry_timeout_ms <= 0:
            raise ValueError("timeouts must be positive")
        if self.tcp_mss <= 0 or self.recv_bufsize <= 0:
            raise ValueError("buffer sizes must be positive")

    @property
    def tcp_window(self) -> int:
        """TCP receive window in bytes."""
        return 8 * self.tcp_mss

    @property
    def send_buffer(self) -> int:
        """TCP send buffer in bytes."""
        return 8 * self.tcp_mss

    @property
    def timeout(self) -> tuple[float, float]:
        """(send, receive) timeouts in seconds."""
        return self.send_retry_timeout_ms / 1000, self.recv_retry_timeout_ms / 1000


class HttpError(Exception):
    """The request could not be carried out over the network."""


@dataclass(frozen=True)
class HttpResponse:
    """Status, body and final URL of a completed request."""

    status_code: int
    payload: bytes
    url: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def text(self) -> str:
        return self.payload.decode("utf-8", errors="replace")


class HttpClient:
    """Sends GET and JSON POST requests."""

    def __init__(
        self,
        settings: HttpSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or HttpSettings()
        self._session = session or requests.Session()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> HttpResponse:
        try:
            resp = self._session.request(method, url, timeout=self.settings.timeout, **kwargs)
        except requests.RequestException as exc:
            raise HttpError(f"{method} request failed: {exc}") from exc
        return HttpResponse(resp.status_code, resp.content, resp.url)

    def get(self, url: str, query: Mapping[str, str] | None = None) -> HttpResponse:
        """GET ``url`` with ``query`` as its query parameters."""
        return self._send("GET", url, params=dict(query) if query else None)

    def post_json(self, url: str, payload: Any) -> HttpResponse:
        """POST ``payload`` as JSON: a string, an object with ``json()``, or plain data."""
        render = getattr(payload, "json", None)
        if callable(render):
            payload = render()
        body = payload if isinstance(payload, str) else json.dumps(payload)
        return self._send(
            "POST",
            url,
            data=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )