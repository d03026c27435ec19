import json

import pytest
import responses

from picobot.main import LED_PAD, TOKEN_ENV, build_parser, main

API = "https://api.example.com"


def test_parser_defaults(monkeypatch):
    monkeypatch.delenv(TOKEN_ENV, raising=False)
    args = build_parser().parse_args([])
    assert args.led_pad == LED_PAD == 2
    assert args.poll_interval == 10.0
    assert args.update_limit == 5
    assert args.token == ""
    assert args.adc_file is None


def test_parser_reads_token_from_environment(monkeypatch):
    monkeypatch.setenv(TOKEN_ENV, "token")
    args = build_parser().parse_args([])
    assert args.token == "token"


def test_missing_token_is_an_error(monkeypatch):
    monkeypatch.delenv(TOKEN_ENV, raising=False)
    with pytest.raises(SystemExit) as info:
        main(["--run-for", "0"])
    assert info.value.code == 2


def test_bad_log_level_is_an_error():
    with pytest.raises(SystemExit) as info:
        main(["--token", "token", "--log-level", "LOUD"])
    assert info.value.code == 2


def test_negative_poll_interval_is_an_error():
    with pytest.raises(SystemExit) as info:
        main(["--token", "token", "--poll-interval", "-1", "--run-for", "0"])
    assert info.value.code == 2


def test_zero_blink_rate_is_an_error():
    with pytest.raises(SystemExit) as info:
        main(["--token", "token", "--blink-bpm", "0", "--run-for", "0"])
    assert info.value.code == 2


def _run(extra):
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(
            responses.POST,
            f"{API}/bottoken/setMyCommands",
            json={"ok": True, "result": True},
        )
        rsps.add(
            responses.GET,
            f"{API}/bottoken/getUpdates",
            json={"ok": True, "result": []},
        )
        code = main(
            [
                "--token", "token",
                "--api-base", API,
                "--poll-interval", "30",
                "--run-for", "0.2",
                *extra,
            ]
        )
        posts = [c for c in rsps.calls if c.request.method == "POST"]
        bodies = [json.loads(c.request.body) for c in posts]
    return code, bodies


def test_main_publishes_commands_and_exits():
    code, bodies = _run([])
    assert code == 0
    assert len(bodies) == 1
    ids = [entry["command"] for entry in bodies[0]["commands"]]
    assert ids == ["/test"]


def test_adc_file_adds_temperature_command(tmp_path):
    adc = tmp_path / "adc"
    adc.write_text("876\n", encoding="ascii")
    code, bodies = _run(["--adc-file", str(adc)])
    assert code == 0
    commands = {e["command"]: e["description"] for e in bodies[0]["commands"]}
    assert commands["/temp"] == "Pico's Temperature"
    assert commands["/test"] == "Just testing"