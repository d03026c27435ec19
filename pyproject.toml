[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "picobot"
version = "0.1.0"
description = "A small Telegram bot agent that polls for updates and answers slash commands"
requires-python = ">=3.10"
keywords = ["telegram", "bot", "chat", "commands", "polling", "agent"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
picobot = "picobot.main:main"

[tool.hatch.build.targets.wheel]
packages = ["picobot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
