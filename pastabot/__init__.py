"""pastabot: canned-reply chat bot for a single Twitch channel."""

__version__ = "0.1.0"
