"""
Configuration management for the Chat Robot.
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _positive_float(name: str, default: float, allow_zero: bool = False) -> float:
    raw = os.getenv(name, str(default))
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw}")
    if value < 0 or (value == 0 and not allow_zero):
        raise ValueError(f"Invalid {name}: {raw}")
    return value


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw}")
    if value <= 0:
        raise ValueError(f"Invalid {name}: {raw}")
    return value


@dataclass
class AppConfig:
    """Application configuration settings with validation."""

    # Identity settings
    bot_name: str
    token: str

    # Connection settings
    api_url: str
    connection_timeout: float  # seconds
    heartbeat: float  # seconds
    reconnect_delay: float  # seconds

    # Outbound rate limiting
    rate_limit_rate: float  # tokens per second
    rate_limit_burst: int

    # Application behavior
    log_level: str

    # Class constants
    DEFAULT_API_URL: ClassVar[str] = "https://slack.com/api"
    DEFAULT_CONNECTION_TIMEOUT: ClassVar[float] = 10.0
    DEFAULT_HEARTBEAT: ClassVar[float] = 30.0
    DEFAULT_RECONNECT_DELAY: ClassVar[float] = 1.0
    DEFAULT_RATE_LIMIT_RATE: ClassVar[float] = 1.0
    DEFAULT_RATE_LIMIT_BURST: ClassVar[int] = 50

    @classmethod
    def load_from_env(
        cls, bot_name: Optional[str] = None, token: Optional[str] = None
    ) -> "AppConfig":
        """
        Load configuration from environment variables.

        Explicit arguments take precedence over the environment.

        Args:
            bot_name: Bot name used as the address prefix
            token: Bot auth token

        Returns:
            AppConfig: Validated configuration object

        Raises:
            ValueError: If required configuration is missing or invalid
        """
        # Load environment variables from .env file
        load_dotenv()

        bot_name = bot_name or os.getenv("BOT_NAME")
        if not bot_name or not bot_name.strip():
            raise ValueError("BOT_NAME not set")
        if " " in bot_name:
            raise ValueError(f"Invalid BOT_NAME: {bot_name!r} must not contain spaces")

        token = token or os.getenv("SLACK_BOT_TOKEN")
        if not token:
            raise ValueError("SLACK_BOT_TOKEN not set")

        config = cls(
            bot_name=bot_name,
            token=token,
            api_url=os.getenv("SLACK_API_URL", cls.DEFAULT_API_URL),
            connection_timeout=_positive_float(
                "CONNECTION_TIMEOUT", cls.DEFAULT_CONNECTION_TIMEOUT
            ),
            heartbeat=_positive_float("HEARTBEAT_INTERVAL", cls.DEFAULT_HEARTBEAT),
            reconnect_delay=_positive_float(
                "RECONNECT_DELAY", cls.DEFAULT_RECONNECT_DELAY, allow_zero=True
            ),
            rate_limit_rate=_positive_float(
                "RATE_LIMIT_RATE", cls.DEFAULT_RATE_LIMIT_RATE
            ),
            rate_limit_burst=_positive_int(
                "RATE_LIMIT_BURST", cls.DEFAULT_RATE_LIMIT_BURST
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

        logger.debug(f"Configuration loaded: {config.to_dict()}")
        return config

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary, without the auth token.

        Returns:
            Dict representation of configuration
        """
        config_dict = asdict(self)
        # Remove sensitive data
        config_dict.pop("token", None)
        return config_dict
