"""
Pytest configuration and shared fixtures for pastabot tests.
"""

import asyncio
import logging

import pytest

from pastabot.core.commands import CommandTable
from pastabot.core.config import BotSettings
from pastabot.core.cooldown import GlobalCooldown
from pastabot.core.dispatch import Dispatcher
from pastabot.core.errors import SendError
from pastabot.models.message import BotIdentity

BOT_NAME = "BotName"
CHANNEL = "somechannel"

REQUIRED_ENV = {
    "TWITCH_BOT_USERNAME": BOT_NAME,
    "TWITCH_OAUTH_TOKEN": "oauth:abc123",
    "TWITCH_CHANNEL": CHANNEL,
    "TWITCH_CLIENT_ID": "client-id",
    "TWITCH_CLIENT_SECRET": "client-secret",
    "TWITCH_BOT_ID": "1000",
}

OPTIONAL_ENV = [
    "TWITCH_REFRESH_TOKEN",
    "MENTION_ONLY",
    "COOLDOWN_SECONDS",
    "LOG_LEVEL",
    "LOG_FILE",
    "COMMANDS_FILE",
    "LIST_COMMAND",
]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTransport:
    """In-memory ChatTransport: feed messages in, collect sent replies."""

    def __init__(self, messages=(), fail_send: bool = False):
        self.joined: list[str] = []
        self.sent: list[tuple[str, str]] = []
        self.fail_send = fail_send
        self._queue: asyncio.Queue = asyncio.Queue()
        for msg in messages:
            self._queue.put_nowait(msg)

    def feed(self, msg) -> None:
        self._queue.put_nowait(msg)

    def close(self) -> None:
        self._queue.put_nowait(None)

    async def join(self, channel: str) -> None:
        self.joined.append(channel)

    async def receive(self):
        return await self._queue.get()

    async def send(self, channel: str, text: str) -> None:
        if self.fail_send:
            raise SendError("network down")
        self.sent.append((channel, text))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def table():
    return CommandTable.build([("!help", "try !list")])


@pytest.fixture
def make_dispatcher(table, clock):
    """Factory for dispatchers with no self-message delay and a fake clock."""

    def _make(*, mention_only: bool = False, duration: float = 0):
        identity = BotIdentity(
            bot_name=BOT_NAME,
            channel=CHANNEL,
            mention_only=mention_only,
            cooldown_seconds=duration,
        )
        return Dispatcher(
            table=table,
            cooldown=GlobalCooldown(duration, clock=clock),
            identity=identity,
            self_delay=0,
        )

    return _make


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Environment with no bot variables and no .env file in the cwd."""
    for key in list(REQUIRED_ENV) + OPTIONAL_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def bot_env(clean_env):
    for key, value in REQUIRED_ENV.items():
        clean_env.setenv(key, value)
    return clean_env


@pytest.fixture
def settings():
    return BotSettings(
        _env_file=None,
        twitch_bot_username=BOT_NAME,
        twitch_oauth_token="abc123",
        twitch_channel=CHANNEL,
        twitch_client_id="client-id",
        twitch_client_secret="client-secret",
        twitch_bot_id="1000",
    )


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
