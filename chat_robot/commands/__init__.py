"""
Command handling for the Chat Robot.
"""

from chat_robot.commands.builtin_actions import register_builtin_actions
from chat_robot.commands.parser import Command, CommandParser, normalize_keyword
from chat_robot.commands.registry import Action, ActionRegistry

__all__ = [
    "Action",
    "ActionRegistry",
    "Command",
    "CommandParser",
    "normalize_keyword",
    "register_builtin_actions",
]
