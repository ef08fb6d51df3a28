"""Data models shared by the bot core."""

from .command import CommandEntry
from .message import BotIdentity, IncomingMessage

__all__ = [
    "BotIdentity",
    "CommandEntry",
    "IncomingMessage",
]
