"""Interface between the dispatcher and a chat network."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pastabot.models.message import IncomingMessage


@runtime_checkable
class ChatTransport(Protocol):
    async def join(self, channel: str) -> None:
        """Start receiving messages from *channel*."""
        ...

    async def receive(self) -> IncomingMessage | None:
        """Next incoming message, or None once the stream is closed."""
        ...

    async def send(self, channel: str, text: str) -> None:
        """Deliver *text* to *channel*; raises SendError on failure.

        Single-channel transports may only deliver to their joined channel.
        """
        ...
