"""Core modules for the chat bot."""

from .bot import Bot
from .commands import LIST_HEADER, CommandTable, list_all
from .config import BotSettings, load_settings
from .cooldown import CooldownState, GlobalCooldown
from .dispatch import SELF_MESSAGE_DELAY, Action, Dispatcher, NoReply, Reply
from .errors import (
    ConfigError,
    LogSinkError,
    PastabotError,
    SendError,
    TransportConnectionError,
)
from .logging import setup_logging
from .transport import ChatTransport

__all__ = [
    # Settings
    "BotSettings",
    "load_settings",
    # Setup functions
    "setup_logging",
    # Command table
    "CommandTable",
    "LIST_HEADER",
    "list_all",
    # Cooldown
    "CooldownState",
    "GlobalCooldown",
    # Dispatch
    "Action",
    "Dispatcher",
    "NoReply",
    "Reply",
    "SELF_MESSAGE_DELAY",
    # Transport
    "Bot",
    "ChatTransport",
    # Errors
    "PastabotError",
    "ConfigError",
    "TransportConnectionError",
    "SendError",
    "LogSinkError",
]
