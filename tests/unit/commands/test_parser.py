"""
Tests for command parsing.
"""

import pytest

from chat_robot.commands.parser import Command, CommandParser, normalize_keyword
from chat_robot.message import MessageType


@pytest.fixture
def parser():
    return CommandParser("Bot")


class TestCommandParser:
    """Test suite for CommandParser."""

    def test_prefix_is_normalized(self, parser):
        assert parser.address_prefix == "bot"

    def test_parse_keyword_and_arguments(self, parser, make_message):
        message = make_message("bot echo hello world")

        command = parser.parse(message)

        assert command == Command(
            keyword="echo", arguments="hello world", source=message
        )
        assert command.channel == "C123"

    def test_parse_keyword_without_arguments(self, parser, make_message):
        command = parser.parse(make_message("bot ping"))

        assert command.keyword == "ping"
        assert command.arguments == ""

    def test_prefix_and_keyword_are_case_insensitive(self, parser, make_message):
        command = parser.parse(make_message("BOT PiNg"))

        assert command.keyword == "ping"

    def test_arguments_are_kept_verbatim(self, parser, make_message):
        command = parser.parse(make_message("bot echo  Mixed Case  spacing "))

        assert command.arguments == " Mixed Case  spacing "

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "bot",
            "bot ",
            "bot  ping",
            "hello bot ping",
            "bots ping",
            "botping",
        ],
    )
    def test_rejects_messages_not_addressed_to_robot(self, parser, make_message, text):
        assert parser.parse(make_message(text)) is None

    @pytest.mark.parametrize(
        "message_type",
        [MessageType.HELLO, MessageType.PONG, MessageType.UNKNOWN, MessageType.ERROR],
    )
    def test_rejects_non_text_messages(self, parser, make_message, message_type):
        assert parser.parse(make_message("bot ping", type=message_type)) is None

    def test_splits_on_spaces_only(self, parser, make_message):
        assert parser.parse(make_message("bot\tping")) is None

    def test_source_message_is_kept(self, parser, make_message):
        message = make_message("bot echo hi", channel="C42")

        command = parser.parse(message)

        assert command.source is message
        assert command.channel == "C42"


def test_normalize_keyword():
    assert normalize_keyword("HeLp") == "help"
    assert normalize_keyword(normalize_keyword("HeLp")) == "help"
