"""
Entry point for the Chat Robot application.
"""

import asyncio
import logging
import sys
from typing import List, Optional

from chat_robot.bot import Robot
from chat_robot.config import AppConfig
from chat_robot.utils.logging_setup import set_log_level, setup_logging

USAGE = "usage: chat-robot bot-name slack-bot-token"


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main application entry point.

    Args:
        argv: Command line arguments, excluding the program name

    Returns:
        int: Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 2:
        print(USAGE, file=sys.stderr)
        return 1
    bot_name, token = argv

    # Setup logging first
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        config = AppConfig.load_from_env(bot_name=bot_name, token=token)
        # .env may set LOG_LEVEL, which is only visible once the config is loaded
        set_log_level(config.log_level)
        logger.info("Configuration loaded successfully")

        robot = Robot(config)
        return await robot.run()

    except KeyboardInterrupt:
        logger.info("Robot interrupted by user")
        return 0
    except Exception as e:
        logger.error(f"Error starting robot: {e}", exc_info=True)
        return 1


def run() -> None:
    """Console script entry point."""
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
