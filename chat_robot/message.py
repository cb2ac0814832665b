"""
Chat message model and wire codec for the Chat Robot.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class MessageType(Enum):
    """Kinds of real-time events the service delivers."""

    MESSAGE = "message"  # Standard text message
    HELLO = "hello"
    PING = "ping"
    PONG = "pong"
    GOODBYE = "goodbye"
    ERROR = "error"
    UNKNOWN = "unknown"  # Anything else, including reply acknowledgements

    @classmethod
    def from_wire(cls, value: Any) -> "MessageType":
        """
        Map a raw wire ``type`` value onto a member.

        Args:
            value: The ``type`` field as received, possibly missing

        Returns:
            MessageType: Matching member, or UNKNOWN
        """
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Message:
    """A single unit of chat communication."""

    type: MessageType
    channel: str = ""
    text: str = ""
    sender: str = ""
    id: Optional[int] = None

    @property
    def is_text(self) -> bool:
        """Whether this is a standard text message."""
        return self.type is MessageType.MESSAGE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """
        Decode a message from its JSON object form.

        Args:
            data: Decoded JSON object

        Returns:
            Message: The decoded message
        """
        text = data.get("text")
        if not isinstance(text, str):
            text = ""

        message_id = data.get("id")
        if not isinstance(message_id, int) or isinstance(message_id, bool):
            message_id = None

        return cls(
            type=MessageType.from_wire(data.get("type")),
            channel=str(data.get("channel") or ""),
            text=text,
            sender=str(data.get("user") or ""),
            id=message_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Encode the message for sending.

        The sender is not part of the outbound wire format.

        Returns:
            Dict suitable for JSON serialization
        """
        data: Dict[str, Any] = {
            "type": self.type.value,
            "channel": self.channel,
            "text": self.text,
        }
        if self.id is not None:
            data["id"] = self.id
        return data
