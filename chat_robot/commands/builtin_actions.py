"""
Built-in actions every Chat Robot answers to.
"""

from chat_robot.commands.parser import Command
from chat_robot.commands.registry import ActionRegistry

LOVE_REPLY = "http://stream1.gifsoup.com/view3/1783565/wall-e-and-eve-o.gif"


def echo(command: Command) -> str:
    """Reply with the command arguments verbatim."""
    return command.arguments


def ping(command: Command) -> str:
    """Reply with pong."""
    return "pong"


def love(command: Command) -> str:
    """Approximate emotion."""
    return LOVE_REPLY


def register_builtin_actions(registry: ActionRegistry) -> ActionRegistry:
    """
    Register the built-in actions on a registry.

    Args:
        registry: Registry to populate

    Returns:
        ActionRegistry: The same registry, for chaining
    """

    def show_help(command: Command) -> str:
        return registry.describe()

    registry.register("echo", "<text> - reply with <text>", echo)
    registry.register("help", "- display all commands", show_help)
    registry.register("love", "- approximate emotion", love)
    registry.register("ping", "- reply with pong", ping)
    return registry
