"""
Registry of the actions the Chat Robot can perform.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Tuple, Union

from chat_robot.commands.parser import Command, normalize_keyword

logger = logging.getLogger(__name__)

HandlerResult = Union[Optional[str], Awaitable[Optional[str]]]
Handler = Callable[[Command], HandlerResult]


@dataclass(frozen=True)
class Action:
    """A registered capability bound to a command keyword."""

    keyword: str
    description: str
    handler: Handler


class ActionRegistry:
    """
    Maps command keywords to actions.

    Keywords are normalized on registration and on lookup, so lookups are
    case-insensitive. Registering a keyword twice replaces the earlier action.
    """

    def __init__(self) -> None:
        self._actions: Dict[str, Action] = {}

    def register(self, keyword: str, description: str, handler: Handler) -> Action:
        """
        Register an action.

        Args:
            keyword: Command keyword that triggers the action
            description: Human-readable description shown by help
            handler: Callable turning a Command into reply text

        Returns:
            Action: The registered action
        """
        normalized = normalize_keyword(keyword)
        if normalized in self._actions:
            logger.warning(f"Replacing existing action for keyword '{normalized}'")

        action = Action(keyword=normalized, description=description, handler=handler)
        self._actions[normalized] = action
        logger.debug(f"Registered action '{normalized}'")
        return action

    def lookup(self, keyword: str) -> Optional[Action]:
        """
        Find the action for a keyword.

        Args:
            keyword: Command keyword in any casing

        Returns:
            The action, or None if no action is registered for it
        """
        return self._actions.get(normalize_keyword(keyword))

    def list(self) -> List[Tuple[str, str]]:
        """
        List registered actions.

        Returns:
            List of (keyword, description) pairs sorted by keyword
        """
        return [
            (keyword, self._actions[keyword].description)
            for keyword in sorted(self._actions)
        ]

    def describe(self) -> str:
        """Render the action list as help text, one action per line."""
        return "\n".join(
            f"{keyword} {description}" for keyword, description in self.list()
        )

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and normalize_keyword(keyword) in self._actions

    def __len__(self) -> int:
        return len(self._actions)
