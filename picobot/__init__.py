"""A Telegram bot agent that polls for updates, answers slash commands and runs a blinker agent."""

__version__ = "0.1.0"