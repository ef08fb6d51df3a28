"""Twitch transport: twitchio 3 bot bridging EventSub chat into the dispatcher."""

from __future__ import annotations

import asyncio
import logging

import twitchio
from twitchio import eventsub
from twitchio.ext import commands

from pastabot.core.config import BotSettings
from pastabot.core.errors import SendError, TransportConnectionError
from pastabot.models.message import IncomingMessage

LOGGER: logging.Logger = logging.getLogger("Bot")


class Bot(commands.Bot):
    """Single-channel chat transport.

    Incoming chat messages are queued and handed out through
    :meth:`receive`; commands are never run through twitchio's own
    command pipeline.
    """

    def __init__(self, *, settings: BotSettings) -> None:
        self.settings = settings
        self._inbox: asyncio.Queue[IncomingMessage | None] = asyncio.Queue()
        self._broadcaster: twitchio.PartialUser | None = None

        super().__init__(
            client_id=settings.twitch_client_id,
            client_secret=settings.twitch_client_secret,
            bot_id=settings.twitch_bot_id,
            prefix="!",
        )

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    async def setup_hook(self) -> None:
        try:
            await self.add_token(
                self.settings.twitch_oauth_token, self.settings.twitch_refresh_token
            )
        except Exception as e:
            raise TransportConnectionError(f"Bot token rejected: {e}") from e

        await self.join(self.settings.twitch_channel)

    async def join(self, channel: str) -> None:
        try:
            users = await self.fetch_users(logins=[channel])
        except Exception as e:
            raise TransportConnectionError(f"Failed to look up channel {channel}: {e}") from e
        if not users:
            raise TransportConnectionError(f"Channel not found: {channel}")

        broadcaster = users[0]
        try:
            await self.subscribe_websocket(
                payload=eventsub.ChatMessageSubscription(
                    broadcaster_user_id=broadcaster.id, user_id=self.settings.twitch_bot_id
                )
            )
        except Exception as e:
            raise TransportConnectionError(f"Failed to subscribe to {channel}: {e}") from e

        self._broadcaster = broadcaster
        LOGGER.info(f"Joined channel: {broadcaster.name} (ID: {broadcaster.id})")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def event_ready(self) -> None:
        LOGGER.info("Successfully logged in as: %s", self.bot_id)

    async def event_message(self, payload: twitchio.ChatMessage) -> None:
        LOGGER.debug(f"[{payload.chatter.name}#{payload.broadcaster.name}]: {payload.text}")

        if self._broadcaster is None or payload.broadcaster.id != self._broadcaster.id:
            return

        self._inbox.put_nowait(
            IncomingMessage(
                sender_name=payload.chatter.name or "",
                text=payload.text or "",
                channel=payload.broadcaster.name or self.settings.twitch_channel,
            )
        )

    # ------------------------------------------------------------------
    # ChatTransport
    # ------------------------------------------------------------------

    async def receive(self) -> IncomingMessage | None:
        return await self._inbox.get()

    async def send(self, channel: str, text: str) -> None:
        if self._broadcaster is None:
            raise SendError(f"Not joined to {channel}")
        if channel.removeprefix("#").lower() != self.settings.twitch_channel:
            LOGGER.warning(
                f"Reply addressed to {channel}, sending to joined channel "
                f"{self.settings.twitch_channel}"
            )
        try:
            await self._broadcaster.send_message(
                message=text,
                sender=self.settings.twitch_bot_id,
                token_for=self.settings.twitch_bot_id,
            )
        except Exception as e:
            raise SendError(f"{type(e).__name__}: {e}") from e

    async def close(self, **options) -> None:
        self._inbox.put_nowait(None)
        await super().close(**options)
