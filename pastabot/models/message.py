"""Chat-side data models: incoming messages and the bot's own identity."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIST_TRIGGER = "!list"


@dataclass(frozen=True)
class IncomingMessage:
    """A chat message as delivered by the transport."""

    sender_name: str
    text: str
    channel: str


@dataclass(frozen=True)
class BotIdentity:
    """Resolved, read-only bot configuration used by the dispatcher."""

    bot_name: str
    channel: str
    mention_only: bool = False
    cooldown_seconds: float = 15
    list_trigger: str = DEFAULT_LIST_TRIGGER

    @property
    def mention(self) -> str:
        return f"@{self.bot_name}"
