# picobot

picobot is a small Telegram bot agent. When started it publishes its list
of slash commands with the Bot API's `setMyCommands` call, then polls
`getUpdates` in a background thread, runs the command named in the text of
each incoming message and replies to the chat it came from. A message whose
text names no known command gets the reply "Unknown command".

Two commands come with it:

- `/test` (`CmdTest`, always registered) replies
  "This is a test. See if this works".
- `/temp` (`CmdTemperature`) replies with a temperature such as
  `Pico Temperature 27.00C`. It is given a function that returns a raw
  12-bit ADC reading of an on-chip temperature sensor; the conversion is
  available on its own as `picobot.commands.adc_to_celsius`, which accepts
  readings from 0 to 4095 and raises `ValueError` otherwise.

A blinker agent (`picobot.blink.BlinkAgent`) runs beside the bot as a
liveness indicator. Its rate is set in blinks per minute with `set_speed`,
and it is switched with `blink_on` and `blink_off`; commands are queued
(at most ten pending) and applied by its run loop.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Running

The package installs one command, `picobot`:

```
picobot --help
TELEGRAMBOTKEY=token picobot --run-for 60
```

Options:

- `--token` – bot API token; defaults to the `TELEGRAMBOTKEY` environment
  variable. The command refuses to start without one.
- `--api-base` – base URL of the bot API (default `https://api.telegram.org`).
- `--poll-interval` – seconds between update polls (default 10).
- `--update-limit` – updates fetched per poll (default 5).
- `--led-pad` – pad number given to the blinker (default 2).
- `--blink-bpm` – blink rate in blinks per minute.
- `--adc-file` – a file holding a raw 12-bit sensor reading; when given,
  `/temp` is registered and reads the file each time it runs.
- `--run-for` – stop after this many seconds; without it the command runs
  until interrupted.
- `--log-level` – one of `NONE`, `ERROR`, `WARN`, `INFO`, `DEBUG`
  (default `INFO`).

## Writing your own command

A command is a `TelegramBotCmd` with a `command_id` such as `/hello`, a
short `description`, and an `execute` method. `execute` receives the bot
(anything that implements `TelegramInterface.send_message`) and the id of
the chat to answer:

```python
from picobot.commands import TelegramBotCmd


class CmdHello(TelegramBotCmd):
    command_id = "/hello"
    description = "Say hello"

    def execute(self, bot, chat_id):
        bot.send_message(chat_id, "Hello from picobot")
```

Register it with `TelegramBot.add_cmd` and remove it with
`TelegramBot.del_cmd`. The bot keeps its commands in a `TelegramBotCmds`
collection (`TelegramBot.commands`), which looks commands up by id with
`get_cmd` and renders them, sorted by id, in the shape `setMyCommands`
expects via `to_dict` and `json`:

```json
{"commands":[{"command":"/hello","description":"Say hello"}]}
```

`TelegramBot.start` runs the bot in its own thread: `send_commands`, then
`do_update` every `poll_interval` seconds until `stop` is called.
`do_update` fetches up to `update_limit` updates, passing `offset` one past
the last `update_id` seen, and hands the reply to `handle_updates`, which
also accepts a payload directly and returns the number of updates it saw.
Every sender is allowed; override `TelegramBot.is_authorised` to restrict
who the bot answers.

## Other modules

- `picobot.http` – `HttpClient` with `get` and `post_json`, using the
  timeouts in `HttpSettings`; network failures raise `HttpError`.
- `picobot.agent` – `Agent`, the base class that runs `run` in a daemon
  thread between `start` and `stop`.
- `picobot.logstack` – `get_logger` and `SdkFormatter`, which prefix each
  message with `[LEVEL] [library] [file:line] `.
- `picobot.kernel` – `KernelConfig` scheduler settings and the fatal hooks
  `stack_overflow_hook` and `assert_called`, which print a banner and raise.
- `picobot.platform` – `BootClock`, `random_bits`, `rng_seed` and
  `HeapMonitor`, a heap accountant that warns when space runs low.
- `picobot.tls` – `TlsSettings` and `create_client_context`, which builds an
  `ssl.SSLContext` limited to the configured versions and ciphers.

## What it does not do

picobot drives no hardware. The `picobot` command creates its blinker
without an LED writer, so blinking is only tracked in the agent's state;
pass `led=` to `BlinkAgent` to drive an output yourself. It has no
temperature sensor of its own – `/temp` reads only what `--adc-file`
holds. It does not manage network connections or reconnect to a wireless
network, and `HttpClient` does not use the context from
`picobot.tls`; requests go through `requests` with its default TLS setup.