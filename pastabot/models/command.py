"""Data model for entries of the command file."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandEntry:
    """A single trigger -> reply record, in file order."""

    command: str  # includes its marker, e.g. "!help"
    text: str
