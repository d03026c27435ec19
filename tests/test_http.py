import json
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from picobot.http import HttpClient, HttpError, HttpSettings

URL = "https://api.example.com/endpoint"


def test_default_timeouts():
    assert HttpSettings().timeout == (0.25, 2.0)


def test_buffers_scale_with_segment_size():
    small = HttpSettings(tcp_mss=500)
    assert small.tcp_window < HttpSettings().tcp_window
    assert small.send_buffer == small.tcp_window


def test_invalid_settings():
    with pytest.raises(ValueError):
        HttpSettings(recv_retry_timeout_ms=0)


def test_get_sends_query():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL, body=b'{"ok":true}', status=200)
        with HttpClient() as client:
            result = client.get(URL, {"limit": "5", "offset": "7"})
    assert result.ok
    assert result.payload == b'{"ok":true}'
    assert parse_qs(urlsplit(result.url).query) == {"limit": ["5"], "offset": ["7"]}


def test_get_reports_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL, body="missing", status=404)
        result = HttpClient().get(URL)
    assert result.status_code == 404
    assert not result.ok
    assert result.text == "missing"


def test_post_json_from_object():
    class Doc:
        def json(self):
            return '{"a":1}'

    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body="done", status=200)
        result = HttpClient().post_json(URL, Doc())
        sent = rsps.calls[0].request
    assert result.ok
    assert sent.body == b'{"a":1}'
    assert sent.headers["Content-Type"] == "application/json"


def test_post_json_from_data():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, status=200)
        HttpClient().post_json(URL, {"x": [1, 2]})
        body = rsps.calls[0].request.body
    assert json.loads(body) == {"x": [1, 2]}


def test_network_failure_raises():
    with responses.RequestsMock():
        with pytest.raises(HttpError):
            HttpClient().get("https://unreachable.example.com/")