"""Error types raised by the bot core and its adapters."""


class PastabotError(Exception):
    """Base class for all bot errors."""


class ConfigError(PastabotError):
    """Missing or invalid settings, or an unreadable/malformed command file."""


class TransportConnectionError(PastabotError):
    """The chat transport could not log in, resolve the channel or subscribe."""


class SendError(PastabotError):
    """An outbound chat message could not be delivered."""


class LogSinkError(PastabotError):
    """The configured log file could not be opened."""
