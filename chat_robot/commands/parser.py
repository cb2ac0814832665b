"""
Inbound message to command parsing for the Chat Robot.
"""

from dataclasses import dataclass
from typing import Optional

from chat_robot.message import Message


def normalize_keyword(value: str) -> str:
    """Normalize an address or keyword token for comparison."""
    return value.lower()


@dataclass(frozen=True)
class Command:
    """A message addressed to the robot, split into keyword and arguments."""

    keyword: str
    arguments: str
    source: Message

    @property
    def channel(self) -> str:
        """Channel the reply should go to."""
        return self.source.channel


class CommandParser:
    """
    Turns inbound chat messages into commands.

    A message is a command when its text is the address prefix, a space and
    a keyword, optionally followed by another space and free-form arguments.
    """

    def __init__(self, address_prefix: str) -> None:
        """
        Initialize the parser.

        Args:
            address_prefix: Token that addresses the robot, usually its name
        """
        self.address_prefix = normalize_keyword(address_prefix)

    def parse(self, message: Message) -> Optional[Command]:
        """
        Parse a message into a command.

        Args:
            message: The inbound message

        Returns:
            The command, or None if the message is not addressed to the robot
        """
        if not message.is_text:
            return None

        parts = message.text.split(" ", 2)
        if len(parts) < 2 or normalize_keyword(parts[0]) != self.address_prefix:
            return None

        # "bot " or "bot  ping" leaves the keyword part empty
        if not parts[1]:
            return None

        return Command(
            keyword=normalize_keyword(parts[1]),
            arguments=parts[2] if len(parts) == 3 else "",
            source=message,
        )
