"""Repository for the YAML command file.

Expected layout::

    messages:
      - command: "!help"
        text: "try !list"

Scalars are read as written (no YAML 1.1 number or
boolean resolution), so `text: 19:00` stays "19:00". Entries are
returned in file order; duplicate handling is left to
:class:`pastabot.core.commands.CommandTable`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from pastabot.core.errors import ConfigError
from pastabot.models.command import CommandEntry

LOGGER: logging.Logger = logging.getLogger("Commands")

MESSAGES_KEY = "messages"


def _as_text(value: Any, field: str, index: int) -> str:
    if not isinstance(value, str):
        raise ConfigError(
            f"{MESSAGES_KEY}[{index}].{field} must be a string, got {type(value).__name__}"
        )
    return value


class CommandFileRepository:
    """Reads command entries from a YAML file on disk."""

    def __init__(self, path: str | Path, *, logger: logging.Logger | None = None) -> None:
        self.path = Path(path)
        self._logger = logger or LOGGER

    def read_document(self) -> Any:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read command file {self.path}: {e}") from e

        try:
            return yaml.load(raw, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse YAML in {self.path}: {e}") from e

    def load(self) -> list[CommandEntry]:
        document = self.read_document()
        if document is None:
            self._logger.warning(f"Command file {self.path} is empty")
            return []

        if not isinstance(document, dict):
            raise ConfigError(
                f"Command file {self.path} must contain a mapping, got {type(document).__name__}"
            )

        if MESSAGES_KEY not in document:
            self._logger.warning(f"Command file {self.path} has no '{MESSAGES_KEY}' key")
            return []

        items = document[MESSAGES_KEY]
        if items is None or items == "":
            return []
        if not isinstance(items, list):
            raise ConfigError(f"'{MESSAGES_KEY}' in {self.path} must be a list")

        entries: list[CommandEntry] = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ConfigError(f"{MESSAGES_KEY}[{index}] must be a mapping")
            if "command" not in item or "text" not in item:
                raise ConfigError(f"{MESSAGES_KEY}[{index}] needs both 'command' and 'text'")

            command = _as_text(item["command"], "command", index).strip()
            if not command:
                raise ConfigError(f"{MESSAGES_KEY}[{index}].command is empty")
            text = _as_text(item["text"], "text", index)

            entries.append(CommandEntry(command=command, text=text))

        return entries


def load_commands(path: str | Path, *, logger: logging.Logger | None = None) -> list[CommandEntry]:
    """Load command entries from *path*, raising ConfigError on any problem."""
    return CommandFileRepository(path, logger=logger).load()
