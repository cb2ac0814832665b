"""
Real-time connection to the chat service.

The handshake exchanges a bot token for a websocket URL and the bot's own
user id over HTTP; messages are then exchanged as JSON text frames over the
websocket.
"""

import asyncio
import itertools
import json
import logging
from typing import Optional, Protocol, Tuple

import aiohttp
import httpx

from chat_robot.exceptions import ConnectionLostError, HandshakeError
from chat_robot.message import Message, MessageType

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://slack.com/api"


class Connection(Protocol):
    """Protocol for an open chat connection."""

    async def receive(self) -> Message:
        """
        Wait for the next inbound message.

        Raises:
            ChatConnectionError: If the connection fails or is closed
        """
        ...

    async def send(self, message: Message) -> None:
        """
        Send a message.

        Raises:
            ChatConnectionError: If the connection fails or is closed
        """
        ...

    async def close(self) -> None:
        """Close the connection."""
        ...


class RTMConnection:
    """
    Websocket connection speaking the real-time messaging protocol.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        websocket: aiohttp.ClientWebSocketResponse,
    ) -> None:
        """
        Initialize the connection.

        Args:
            session: HTTP session owning the websocket
            websocket: The open websocket
        """
        self.session = session
        self.websocket = websocket
        self._message_ids = itertools.count(1)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or self.websocket.closed

    async def receive(self) -> Message:
        """
        Wait for the next inbound message.

        Frames that are not valid JSON objects are logged and skipped.

        Returns:
            Message: The decoded message

        Raises:
            ConnectionLostError: If the websocket is closed or errors, or
                the service announces it is about to disconnect
        """
        while True:
            if self.closed:
                raise ConnectionLostError("Connection is closed")

            frame = await self.websocket.receive()

            if frame.type in (
                aiohttp.WSMsgType.CLOSE,
                aiohttp.WSMsgType.CLOSING,
                aiohttp.WSMsgType.CLOSED,
            ):
                raise ConnectionLostError(
                    f"Connection closed by remote (code {self.websocket.close_code})"
                )
            if frame.type == aiohttp.WSMsgType.ERROR:
                raise ConnectionLostError(f"Websocket error: {self.websocket.exception()}")
            if frame.type != aiohttp.WSMsgType.TEXT:
                logger.debug(f"Ignoring websocket frame of type {frame.type}")
                continue

            try:
                data = json.loads(frame.data)
            except json.JSONDecodeError as e:
                logger.warning(f"Discarding undecodable frame: {e}")
                continue
            if not isinstance(data, dict):
                logger.warning(f"Discarding non-object frame: {frame.data!r}")
                continue

            message = Message.from_dict(data)
            if message.type is MessageType.GOODBYE:
                raise ConnectionLostError("Service announced disconnect")
            if message.type is MessageType.ERROR:
                logger.error(f"Service reported an error: {data.get('error')}")

            return message

    async def send(self, message: Message) -> None:
        """
        Send a message, stamping it with the next sequence id.

        Args:
            message: The message to send

        Raises:
            ConnectionLostError: If the websocket is closed or the send fails
        """
        if self.closed:
            raise ConnectionLostError("Connection is closed")

        payload = message.to_dict()
        payload["id"] = next(self._message_ids)
        try:
            await self.websocket.send_str(json.dumps(payload))
        except (aiohttp.ClientError, ConnectionError, RuntimeError) as e:
            raise ConnectionLostError(f"Failed to send message: {e}") from e

    async def close(self) -> None:
        """Close the websocket and its session."""
        if self._closed:
            return
        self._closed = True

        try:
            await self.websocket.close()
        finally:
            await self.session.close()


async def _start_session(
    token: str, api_url: str, timeout: float
) -> Tuple[str, str]:
    """
    Exchange a bot token for a websocket URL and the bot's user id.

    Returns:
        Tuple of (websocket_url, identity)

    Raises:
        HandshakeError: If the service refuses the token or cannot be reached
    """
    url = f"{api_url.rstrip('/')}/rtm.connect"
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, params={"token": token})
            response.raise_for_status()
            body = response.json()
    except httpx.HTTPStatusError as e:
        raise HandshakeError(
            f"Handshake failed with HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise HandshakeError(f"Handshake request failed: {e}") from e
    except ValueError as e:
        raise HandshakeError(f"Handshake returned invalid JSON: {e}") from e

    if not isinstance(body, dict) or not body.get("ok"):
        error = body.get("error") if isinstance(body, dict) else None
        raise HandshakeError(f"Chat service error: {error or 'unknown error'}")

    websocket_url = body.get("url")
    self_info = body.get("self")
    identity = self_info.get("id") if isinstance(self_info, dict) else None
    if not websocket_url or not identity:
        raise HandshakeError("Handshake response is missing url or self id")

    return websocket_url, identity


async def rtm_connect(
    token: str,
    api_url: str = DEFAULT_API_URL,
    timeout: float = 10.0,
    heartbeat: Optional[float] = 30.0,
) -> Tuple[RTMConnection, str]:
    """
    Open a real-time connection.

    Args:
        token: Bot auth token
        api_url: Base URL of the web API
        timeout: Timeout in seconds for the handshake and websocket dial
        heartbeat: Websocket ping interval in seconds, None to disable

    Returns:
        Tuple of (connection, identity)

    Raises:
        HandshakeError: If the handshake or the websocket dial fails
    """
    websocket_url, identity = await _start_session(token, api_url, timeout)

    session = aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=None, sock_connect=timeout)
    )
    try:
        websocket = await session.ws_connect(websocket_url, heartbeat=heartbeat)
    except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as e:
        await session.close()
        raise HandshakeError(f"Failed to open websocket: {e}") from e

    logger.info(f"Connected to chat service as {identity}")
    return RTMConnection(session, websocket), identity
