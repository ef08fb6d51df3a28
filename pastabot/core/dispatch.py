"""Per-message decision engine: addressing, extraction, lookup and cooldown."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from pastabot.core.commands import CommandTable
from pastabot.core.cooldown import GlobalCooldown
from pastabot.core.errors import SendError
from pastabot.core.transport import ChatTransport
from pastabot.models.message import BotIdentity, IncomingMessage

LOGGER: logging.Logger = logging.getLogger("Dispatch")

COMMAND_PREFIX = "!"

# Platforms echo the bot's own messages back; pause before reacting to them.
SELF_MESSAGE_DELAY = 1.0

UNKNOWN_COMMAND_NOTICE = "@{user} Unknown command. Use {list_trigger} to see available commands."


@dataclass(frozen=True)
class NoReply:
    reason: str


@dataclass(frozen=True)
class Reply:
    channel: str
    text: str
    command: str
    unknown: bool = False  # True for the unknown-command notice


Action = NoReply | Reply


class Dispatcher:
    """Decides, for each incoming message, whether and what to reply.

    The cooldown gate is the only shared mutable state. Its check (first
    step) and arming (on a match) are separate, so concurrent dispatches can
    both pass the check before either arms it.
    """

    def __init__(
        self,
        *,
        table: CommandTable,
        cooldown: GlobalCooldown,
        identity: BotIdentity,
        self_delay: float = SELF_MESSAGE_DELAY,
        logger: logging.Logger | None = None,
    ) -> None:
        self.table = table
        self.cooldown = cooldown
        self.identity = identity
        self.self_delay = self_delay
        self.logger = logger or LOGGER
        self._tasks: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Decision
    # ------------------------------------------------------------------

    def is_addressed(self, text: str) -> bool:
        """Whether *text* is eligible for command processing."""
        mentioned = self.identity.mention in text
        if self.identity.mention_only:
            return mentioned
        return mentioned or text.strip().startswith(COMMAND_PREFIX)

    def extract_command(self, text: str) -> str | None:
        """First token after removing the first @mention, or None if blank."""
        parts = text.replace(self.identity.mention, "", 1).strip().split()
        return parts[0] if parts else None

    async def on_message(self, msg: IncomingMessage) -> Action:
        if not self.cooldown.can_use():
            self.logger.debug(f"Bot in cooldown ({self.cooldown.remaining():.1f}s left)")
            return NoReply("cooldown")

        if msg.sender_name == self.identity.bot_name:
            await asyncio.sleep(self.self_delay)

        if not self.is_addressed(msg.text):
            return NoReply("not-addressed")

        cmd = self.extract_command(msg.text)
        if cmd is None:
            return NoReply("empty")

        response = self.table.get(cmd)
        if response is not None:
            # Armed before the send is attempted; a failed send still spends the window.
            self.cooldown.use()
            self.logger.info(
                f"Command executed: user={msg.sender_name} command={cmd}",
                extra={"user": msg.sender_name, "command": cmd, "response": response},
            )
            return Reply(channel=self.identity.channel, text=response, command=cmd)

        self.logger.debug(
            f"Unknown command: user={msg.sender_name} command={cmd}",
            extra={"user": msg.sender_name, "command": cmd},
        )
        if self.identity.mention_only:
            notice = UNKNOWN_COMMAND_NOTICE.format(
                user=msg.sender_name, list_trigger=self.identity.list_trigger
            )
            return Reply(channel=self.identity.channel, text=notice, command=cmd, unknown=True)

        return NoReply("unknown-command")

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    async def handle(self, transport: ChatTransport, msg: IncomingMessage) -> Action:
        """Dispatch *msg* and send the reply, if any, through *transport*."""
        action = await self.on_message(msg)
        if isinstance(action, Reply):
            try:
                await transport.send(action.channel, action.text)
            except SendError as e:
                self.logger.warning(f"Failed to send reply for {action.command}: {e}")
        return action

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error("Dispatch failed", exc_info=error)

    async def serve(self, transport: ChatTransport) -> None:
        """Dispatch every received message concurrently until the stream closes."""
        try:
            while True:
                msg = await transport.receive()
                if msg is None:
                    break
                task = asyncio.create_task(self.handle(transport, msg))
                self._tasks.add(task)
                task.add_done_callback(self._on_task_done)
        finally:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
