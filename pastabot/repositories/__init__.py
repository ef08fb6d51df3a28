"""Data sources the bot reads at startup."""

from .commands import CommandFileRepository, load_commands

__all__ = [
    "CommandFileRepository",
    "load_commands",
]
