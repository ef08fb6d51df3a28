import asyncio
import logging
import sys

from dotenv import load_dotenv

from pastabot.core.bot import Bot
from pastabot.core.commands import CommandTable
from pastabot.core.config import BotSettings, load_settings
from pastabot.core.cooldown import GlobalCooldown
from pastabot.core.dispatch import Dispatcher
from pastabot.core.errors import ConfigError, TransportConnectionError
from pastabot.core.logging import setup_logging
from pastabot.repositories.commands import load_commands

LOGGER: logging.Logger = logging.getLogger("Bot")


def build_dispatcher(settings: BotSettings) -> Dispatcher:
    """Load the command file and wire the dispatch core; raises ConfigError."""
    identity = settings.identity()
    entries = load_commands(settings.commands_file)
    table = CommandTable.build(entries, list_trigger=identity.list_trigger)
    cooldown = GlobalCooldown(identity.cooldown_seconds)
    return Dispatcher(table=table, cooldown=cooldown, identity=identity)


async def run(settings: BotSettings, dispatcher: Dispatcher) -> None:
    serve_task: asyncio.Task | None = None
    try:
        async with Bot(settings=settings) as bot:
            serve_task = asyncio.create_task(dispatcher.serve(bot))
            await bot.start(with_adapter=False, load_tokens=False, save_tokens=False)
    except TransportConnectionError:
        raise
    except Exception as e:
        raise TransportConnectionError(f"Connection failed: {e}") from e
    finally:
        if serve_task is not None:
            serve_task.cancel()
            await asyncio.gather(serve_task, return_exceptions=True)


def main() -> None:
    env_loaded = load_dotenv()

    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging()
        LOGGER.error(f"Startup failed: {e}")
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_file)
    if not env_loaded:
        LOGGER.warning("No .env file loaded, using process environment only")

    try:
        dispatcher = build_dispatcher(settings)
    except ConfigError as e:
        LOGGER.error(f"Startup failed: {e}")
        sys.exit(1)

    LOGGER.info(
        f"Bot starting: channel={settings.twitch_channel} "
        f"bot_username={settings.twitch_bot_username} "
        f"mention_only={settings.mention_only} "
        f"cooldown_seconds={settings.cooldown_seconds}"
    )

    try:
        asyncio.run(run(settings, dispatcher))
    except TransportConnectionError as e:
        LOGGER.error(f"Connection error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        LOGGER.warning("Shutting down due to KeyboardInterrupt...")


if __name__ == "__main__":
    main()
