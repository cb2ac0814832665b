"""
Error types raised by the Chat Robot.
"""


class RobotError(Exception):
    """Base class for errors that end a dispatch run."""

    pass


class ChatConnectionError(RobotError):
    """Raised when the connection to the chat service fails."""

    pass


class HandshakeError(ChatConnectionError):
    """Raised when the session handshake or websocket dial fails."""

    pass


class ConnectionLostError(ChatConnectionError):
    """Raised when an established connection is closed or broken."""

    pass


class HandlerError(RobotError):
    """Raised when a command handler fails to produce a reply."""

    def __init__(self, keyword: str, message: str) -> None:
        super().__init__(message)
        self.keyword = keyword
