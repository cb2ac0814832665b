"""
Core robot implementation for the Chat Robot.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple

from chat_robot.commands import (
    ActionRegistry,
    Command,
    CommandParser,
    register_builtin_actions,
)
from chat_robot.config import AppConfig
from chat_robot.connection import Connection, rtm_connect
from chat_robot.exceptions import ChatConnectionError, HandlerError, RobotError
from chat_robot.message import Message, MessageType
from chat_robot.utils.rate_limiter import TokenBucketRateLimiter

logger = logging.getLogger(__name__)

Connector = Callable[[str], Awaitable[Tuple[Connection, str]]]


class RobotState(Enum):
    """Connection lifecycle states."""

    CONNECTING = "connecting"
    RUNNING = "running"
    DISCONNECTED = "disconnected"


@dataclass
class Session:
    """Per-connection state, replaced wholesale on every reconnect."""

    connection: Connection
    identity: str
    rate_limiter: TokenBucketRateLimiter


class Robot:
    """
    Chat robot that answers commands addressed to it.

    A run receives messages one at a time, parses those addressed to the
    robot into commands, dispatches them to registered actions and sends
    the replies through a token bucket. Any connection or handler failure
    ends the run; ``run`` reconnects and starts a new one.
    """

    def __init__(
        self,
        config: AppConfig,
        registry: Optional[ActionRegistry] = None,
        connector: Optional[Connector] = None,
    ) -> None:
        """
        Initialize the robot.

        Args:
            config: Application configuration
            registry: Actions to dispatch to (default: the built-in actions)
            connector: Coroutine opening a connection for a token and
                returning it with the bot's identity (default: rtm_connect)
        """
        self.config = config
        self.name = config.bot_name
        self.parser = CommandParser(config.bot_name)
        self.registry = (
            registry
            if registry is not None
            else register_builtin_actions(ActionRegistry())
        )
        self.connector = connector or self._rtm_connect
        self.state = RobotState.DISCONNECTED
        self.session: Optional[Session] = None

    async def _rtm_connect(self, token: str) -> Tuple[Connection, str]:
        return await rtm_connect(
            token,
            api_url=self.config.api_url,
            timeout=self.config.connection_timeout,
            heartbeat=self.config.heartbeat,
        )

    @property
    def identity(self) -> Optional[str]:
        """The bot's own user id on the current connection."""
        return self.session.identity if self.session else None

    async def connect(self) -> None:
        """
        Open a new connection and bind a fresh session to it.

        Raises:
            ChatConnectionError: If the connection cannot be established
        """
        await self.close_session()
        self.state = RobotState.CONNECTING
        logger.info(f"Connecting {self.name}")

        try:
            connection, identity = await self.connector(self.config.token)
        except Exception:
            self.state = RobotState.DISCONNECTED
            raise

        self.session = Session(
            connection=connection,
            identity=identity,
            rate_limiter=TokenBucketRateLimiter(
                rate=self.config.rate_limit_rate,
                capacity=self.config.rate_limit_burst,
            ),
        )
        self.state = RobotState.RUNNING
        logger.info(f"{self.name} connected as {identity}")

    async def close_session(self) -> None:
        """Close and drop the current session, if any."""
        session, self.session = self.session, None
        if session is None:
            return

        try:
            await session.connection.close()
        except Exception as e:
            logger.warning(f"Error while closing connection: {e}")

    def _require_session(self) -> Session:
        if self.session is None or self.state is not RobotState.RUNNING:
            raise ChatConnectionError("Robot is not connected")
        return self.session

    async def dispatch_loop(self) -> None:
        """
        Run one receive, parse, dispatch and reply loop.

        Returns only by raising.

        Raises:
            ChatConnectionError: If receiving or sending fails
            HandlerError: If a command handler fails
        """
        session = self._require_session()
        try:
            while True:
                message = await session.connection.receive()
                command = self.parser.parse(message)
                if command is None:
                    continue
                await self.dispatch(command)
        except RobotError:
            self.state = RobotState.DISCONNECTED
            await self.close_session()
            raise

    async def dispatch(self, command: Command) -> bool:
        """
        Run the action for a command and send its reply.

        Unknown keywords are ignored without replying.

        Args:
            command: The parsed command

        Returns:
            bool: True if a reply passed the rate limiter and was sent

        Raises:
            HandlerError: If the handler fails
        """
        action = self.registry.lookup(command.keyword)
        if action is None:
            logger.debug(f"Ignoring unknown command '{command.keyword}'")
            return False

        logger.info(f"Running '{action.keyword}' for channel {command.channel}")
        try:
            reply = action.handler(command)
            if inspect.isawaitable(reply):
                reply = await reply
        except Exception as e:
            raise HandlerError(
                action.keyword, f"Action '{action.keyword}' failed: {e}"
            ) from e

        if reply is None:
            return False
        return await self.send_message(command.channel, reply)

    async def send_message(self, channel: str, text: str) -> bool:
        """
        Send a text message to a channel.

        Args:
            channel: Destination channel
            text: Message text

        Returns:
            bool: True if the message was sent, False if rate limited
        """
        session = self._require_session()
        return await self.post_message(
            Message(
                type=MessageType.MESSAGE,
                channel=channel,
                text=text,
                sender=session.identity,
            )
        )

    async def post_message(self, message: Message) -> bool:
        """
        Send a message through the rate limiter.

        Messages refused by the rate limiter are dropped, not queued.

        Args:
            message: The message to send

        Returns:
            bool: True if the message was sent, False if rate limited
        """
        session = self._require_session()
        if not session.rate_limiter.allow():
            logger.warning(f"rate limiting message {message}")
            return False

        await session.connection.send(message)
        return True

    async def run(self) -> int:
        """
        Connect and keep dispatching, reconnecting after every failed run.

        Returns:
            int: Exit code (non-zero if the first connection fails)
        """
        try:
            try:
                await self.connect()
            except Exception as e:
                logger.error(f"Unable to start {self.name}: {e}")
                return 1

            logger.info(f"Running {self.name}")
            while True:
                try:
                    if self.state is not RobotState.RUNNING:
                        await self.connect()
                    await self.dispatch_loop()
                except RobotError as e:
                    logger.error(f"Error running {self.name}: {e}")
                except Exception as e:
                    logger.error(
                        f"Unexpected error running {self.name}: {e}", exc_info=True
                    )
                    self.state = RobotState.DISCONNECTED
                    await self.close_session()

                await asyncio.sleep(self.config.reconnect_delay)
        finally:
            await self.cleanup()

    async def cleanup(self) -> None:
        """
        Clean up all resources used by the robot.
        """
        logger.info(f"Shutting down {self.name}")
        self.state = RobotState.DISCONNECTED
        await self.close_session()
