import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from pastabot.core.config import LOG_LEVELS
from pastabot.core.errors import LogSinkError

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: str | None) -> int:
    name = LOG_LEVELS.get((log_level or "INFO").strip().upper(), "INFO")
    return getattr(logging, name)


def _open_file_handler(log_file: str) -> logging.Handler:
    try:
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as e:
        raise LogSinkError(f"Cannot open log file {log_file}: {e}") from e
    handler.setFormatter(logging.Formatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATEFMT))
    return handler


def _console_handler() -> logging.Handler:
    try:
        console = Console(width=120)

        rich_handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,  # chat text is logged verbatim
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            tracebacks_width=120,
        )
        rich_handler.setFormatter(
            logging.Formatter(fmt="%(message)s", datefmt="[%Y-%m-%d %H:%M:%S]")
        )
        return rich_handler
    except Exception as e:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATEFMT))
        logging.getLogger("Bot").warning(
            f"Failed to setup Rich logging: {e}, using standard logging"
        )
        return handler


def setup_logging(log_level: str | None = None, log_file: str | None = None) -> None:
    """Configure the root logger once.

    Falls back to the console when *log_file* cannot be opened.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")
    if log_file is None:
        log_file = os.getenv("LOG_FILE", "")
    level = _resolve_level(log_level)

    sink_error: LogSinkError | None = None
    handler: logging.Handler | None = None
    if log_file:
        try:
            handler = _open_file_handler(log_file)
        except LogSinkError as e:
            sink_error = e
    if handler is None:
        handler = _console_handler()

    logging.basicConfig(level=level, handlers=[handler], force=True)

    logger = logging.getLogger("Bot")
    if sink_error is not None:
        logger.warning(f"{sink_error}, logging to console instead")

    if level == logging.DEBUG:
        logging.getLogger("twitchio").setLevel(logging.DEBUG)
        logging.getLogger("twitchio.http").setLevel(logging.DEBUG)
        logging.getLogger("twitchio.websockets").setLevel(logging.DEBUG)
    else:
        logging.getLogger("twitchio").setLevel(logging.INFO)
        logging.getLogger("twitchio.http").setLevel(logging.WARNING)
        logging.getLogger("twitchio.websockets").setLevel(logging.WARNING)

    logging.getLogger("asyncio").setLevel(logging.ERROR)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
