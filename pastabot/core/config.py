"""Bot settings resolved once at startup from the environment and .env"""

import logging
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pastabot.core.errors import ConfigError
from pastabot.models.message import DEFAULT_LIST_TRIGGER, BotIdentity

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 15
DEFAULT_COMMANDS_FILE = "commands.yaml"

LOG_LEVELS = {"DEBUG": "DEBUG", "INFO": "INFO", "WARN": "WARNING", "WARNING": "WARNING", "ERROR": "ERROR"}


class BotSettings(BaseSettings):
    """pastabot settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Bot account
    twitch_bot_username: str = Field(..., description="Bot login, used for @mentions")
    twitch_oauth_token: str = Field(..., description="Bot user access token")
    twitch_channel: str = Field(..., description="Channel login to join")

    # Twitch application (EventSub transport)
    twitch_client_id: str = Field(..., description="Twitch OAuth Client ID")
    twitch_client_secret: str = Field(..., description="Twitch OAuth Client Secret")
    twitch_bot_id: str = Field(..., description="Bot User ID")
    twitch_refresh_token: str = Field(default="", description="Refresh token for the bot token")

    # Behaviour
    mention_only: bool = Field(default=False, description="Only answer @mentions")
    cooldown_seconds: int = Field(
        default=DEFAULT_COOLDOWN_SECONDS, description="Global cooldown between replies"
    )
    commands_file: Path = Field(
        default=Path(DEFAULT_COMMANDS_FILE), description="YAML command file"
    )
    list_command: str = Field(default=DEFAULT_LIST_TRIGGER, description="Listing trigger")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="", description="Log file path, empty for console")

    @field_validator(
        "twitch_bot_username",
        "twitch_oauth_token",
        "twitch_channel",
        "twitch_client_id",
        "twitch_client_secret",
        "twitch_bot_id",
        "list_command",
    )
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Reject blank values; an empty env var counts as missing"""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("twitch_oauth_token")
    @classmethod
    def strip_oauth_prefix(cls, v: str) -> str:
        """Accept IRC-style 'oauth:' tokens"""
        return v.removeprefix("oauth:")

    @field_validator("twitch_channel")
    @classmethod
    def normalize_channel(cls, v: str) -> str:
        return v.removeprefix("#").lower()

    @field_validator("mention_only", mode="before")
    @classmethod
    def parse_mention_only(cls, v: object) -> bool:
        """Only the literal 'true' (any case) enables mention-only mode"""
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() == "true"

    @field_validator("cooldown_seconds", mode="before")
    @classmethod
    def parse_cooldown(cls, v: object) -> int:
        """Fall back to the default on unparsable values, clamp negatives to 0"""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_COOLDOWN_SECONDS
        try:
            seconds = int(v)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            logger.warning(
                f"Invalid COOLDOWN_SECONDS '{v}', defaulting to {DEFAULT_COOLDOWN_SECONDS}"
            )
            return DEFAULT_COOLDOWN_SECONDS
        return max(0, seconds)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid"""
        v_upper = v.strip().upper()
        if v_upper not in LOG_LEVELS:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return LOG_LEVELS[v_upper]

    def identity(self) -> BotIdentity:
        return BotIdentity(
            bot_name=self.twitch_bot_username,
            channel=self.twitch_channel,
            mention_only=self.mention_only,
            cooldown_seconds=self.cooldown_seconds,
            list_trigger=self.list_command,
        )


def load_settings(**overrides) -> BotSettings:
    """Build settings, turning validation failures into ConfigError."""
    try:
        return BotSettings(**overrides)
    except ValidationError as e:
        problems = "\n".join(
            f"  - {'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid or missing settings:\n{problems}") from e
