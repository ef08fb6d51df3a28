"""Immutable trigger -> reply table with a synthesized listing command."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from pastabot.models.command import CommandEntry
from pastabot.models.message import DEFAULT_LIST_TRIGGER

LOGGER: logging.Logger = logging.getLogger("Commands")

LIST_HEADER = "Available commands: "


def list_all(triggers: Iterable[str], *, exclude: str | None = None) -> str:
    """Sorted, comma-joined trigger listing prefixed with LIST_HEADER."""
    names = sorted(t for t in set(triggers) if t != exclude)
    return LIST_HEADER + ", ".join(names)


class CommandTable(Mapping[str, str]):
    """Read-only mapping of trigger to reply.

    Lookups are exact and case-sensitive. Build instances with
    :meth:`build`; the constructor takes an already final mapping.
    """

    def __init__(self, commands: Mapping[str, str], *, list_trigger: str = DEFAULT_LIST_TRIGGER):
        self._commands = MappingProxyType(dict(commands))
        self.list_trigger = list_trigger

    @classmethod
    def build(
        cls,
        entries: Iterable[CommandEntry | tuple[str, str]],
        *,
        list_trigger: str = DEFAULT_LIST_TRIGGER,
        logger: logging.Logger | None = None,
    ) -> CommandTable:
        """Build a table from entries in load order; later duplicates win.

        The listing reply is computed from the file triggers before the
        listing trigger itself is inserted.
        """
        log = logger or LOGGER
        commands: dict[str, str] = {}

        for entry in entries:
            if isinstance(entry, CommandEntry):
                trigger, reply = entry.command, entry.text
            else:
                trigger, reply = entry
            if trigger in commands:
                log.debug(f"Duplicate trigger {trigger}, later entry wins")
            commands[trigger] = reply

        log.info(f"Loaded {len(commands)} commands")
        for trigger in commands:
            log.debug(f"Loaded command: {trigger}")

        if list_trigger in commands:
            log.warning(f"Command file defines reserved trigger {list_trigger}, overriding it")

        commands[list_trigger] = list_all(commands, exclude=list_trigger)
        return cls(commands, list_trigger=list_trigger)

    def __getitem__(self, trigger: str) -> str:
        return self._commands[trigger]

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"CommandTable({len(self)} commands, list_trigger={self.list_trigger!r})"
