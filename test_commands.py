"""
Tests for the command parser, dispatcher and bet command.
"""

import asyncio
from datetime import time

import pytest

from betting import Actor, ChatEvent, Role, RoundRegistry
from command import CommandDispatcher, CommandParser
from command.commands import bet
from command.commands.bet import BetCommand
from command.commands.help import HelpCommand
from command.factory import CommandFactory, build_command_factory
from utils import BotConfig

CHANNEL = "#stream"


class RecordingSink:
    """Message sink that keeps everything sent to it."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send(self, channel: str, text: str) -> None:
        self.sent.append((channel, text))

    def texts(self) -> list[str]:
        return [text for _, text in self.sent]

    def clear(self) -> None:
        self.sent.clear()


class FailingSink:
    async def send(self, channel: str, text: str) -> None:
        raise ConnectionError("gone")


def make_dispatcher(**config_overrides):
    registry = RoundRegistry()
    sink = RecordingSink()
    dispatcher = CommandDispatcher(registry, sink, BotConfig(**config_overrides))
    return dispatcher, registry, sink


def say(dispatcher, text, name="viewer", roles=(), channel=CHANNEL):
    event = ChatEvent(channel=channel, text=text, actor=Actor(display_name=name, roles=set(roles)))
    return asyncio.run(dispatcher.handle(event))


def mod_say(dispatcher, text, channel=CHANNEL):
    return say(dispatcher, text, name="mod", roles=[Role.MODERATOR], channel=channel)


def test_parser_tokenizes_command():
    parser = CommandParser("!")
    assert parser.tokenize("!bet 10:00 10:15") == ["bet", "10:00", "10:15"]
    assert parser.tokenize("!bet end, 9:30!") == ["bet", "end", "9:30"]
    assert parser.tokenize("hello !bet start") == []
    assert parser.tokenize("!") == []
    assert parser.tokenize("!?!") == []


def test_parser_parse():
    parser = CommandParser("!")
    assert parser.parse("!BET start") == ("bet", ["start"])
    assert parser.parse("!help") == ("help", [])
    assert parser.parse("just chatting") == ("", [])


def test_parser_custom_marker():
    parser = CommandParser("$")
    assert parser.is_command("$bet start")
    assert not parser.is_command("!bet start")
    assert parser.parse("$bet start") == ("bet", ["start"])


def test_plain_chat_is_ignored():
    dispatcher, registry, sink = make_dispatcher()
    assert say(dispatcher, "bet start") is None
    assert say(dispatcher, "!") is None
    assert sink.sent == []


def test_end_to_end_round():
    dispatcher, registry, sink = make_dispatcher()

    mod_say(dispatcher, "!bet start")
    assert sink.texts() == [bet.STARTED]
    assert registry.get(CHANNEL).bets == {}

    say(dispatcher, "!bet 10:00 10:15", name="alice")
    say(dispatcher, "!bet 10:00 10:20", name="bob")
    assert registry.get(CHANNEL).bets == {
        "alice": [time(10, 0), time(10, 15)],
        "bob": [time(10, 0), time(10, 20)],
    }

    sink.clear()
    response = mod_say(dispatcher, "!bet end 10:00 10:15")
    assert response.success
    assert sink.texts() == [bet.ENDED, bet.WINNERS, "🥳 - alice"]
    assert registry.get(CHANNEL) is None

    sink.clear()
    mod_say(dispatcher, "!bet close")
    assert sink.texts() == [f"mod -> {bet.NO_ACTIVE_BIDDING}"]


def test_end_without_winners():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    say(dispatcher, "!bet 11:00", name="alice")
    sink.clear()

    mod_say(dispatcher, "!bet end 10:00")
    assert sink.texts() == [bet.ENDED, bet.NO_WINNERS]
    assert registry.get(CHANNEL) is None


def test_winners_are_listed_alphabetically():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    for name in ["zoe", "adam", "mia"]:
        say(dispatcher, "!bet 12:00", name=name)
    sink.clear()

    mod_say(dispatcher, "!bet end 12:00")
    assert sink.texts()[2:] == ["🥳 - adam", "🥳 - mia", "🥳 - zoe"]


def test_close_blocks_new_bets_silently():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    say(dispatcher, "!bet 10:00", name="alice")
    mod_say(dispatcher, "!bet close")
    assert registry.get(CHANNEL).closed
    sink.clear()

    assert say(dispatcher, "!bet 10:00", name="bob") is None
    assert say(dispatcher, "!bet garbage", name="bob") is None
    assert sink.sent == []
    assert registry.get(CHANNEL).bets == {"alice": [time(10, 0)]}


def test_closed_round_can_still_be_ended():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    say(dispatcher, "!bet 10:00", name="alice")
    mod_say(dispatcher, "!bet close")
    sink.clear()

    mod_say(dispatcher, "!bet end 10:00")
    assert "🥳 - alice" in sink.texts()


def test_resubmitted_bet_replaces_previous():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    say(dispatcher, "!bet 10:00 10:15", name="alice")
    say(dispatcher, "!bet 11:00", name="alice")
    assert registry.get(CHANNEL).bets == {"alice": [time(11, 0)]}


def test_bad_time_is_rejected_without_mutation():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    say(dispatcher, "!bet 10:00", name="alice")
    sink.clear()

    response = say(dispatcher, "!bet 10:00 25:00", name="alice")
    assert not response.success
    assert sink.texts() == [f"alice -> {bet.UNREADABLE_TIMES}"]
    assert registry.get(CHANNEL).bets == {"alice": [time(10, 0)]}


def test_bet_without_round():
    dispatcher, registry, sink = make_dispatcher()
    say(dispatcher, "!bet 10:00", name="alice")
    assert sink.texts() == [f"alice -> {bet.NO_ACTIVE_BIDDING}"]
    assert registry.get(CHANNEL) is None


def test_end_requires_times():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    sink.clear()

    mod_say(dispatcher, "!bet end")
    assert sink.texts() == [f"mod -> {bet.END_USAGE}"]
    assert registry.get(CHANNEL) is not None


def test_end_with_bad_time_keeps_round():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    sink.clear()

    mod_say(dispatcher, "!bet end 10:00 noon")
    assert sink.texts() == [f"mod -> {bet.UNREADABLE_TIMES}"]
    assert registry.get(CHANNEL) is not None


def test_end_without_round_reports_before_usage():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet end")
    assert sink.texts() == [f"mod -> {bet.NO_ACTIVE_BIDDING}"]


def test_start_while_active_is_rejected():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    say(dispatcher, "!bet 10:00", name="alice")
    sink.clear()

    mod_say(dispatcher, "!bet start")
    assert sink.texts() == [f"mod -> {bet.ALREADY_ACTIVE}"]
    assert registry.get(CHANNEL).bets == {"alice": [time(10, 0)]}


def test_start_while_active_replaces_when_configured():
    dispatcher, registry, sink = make_dispatcher(replace_active_round=True)
    mod_say(dispatcher, "!bet start")
    say(dispatcher, "!bet 10:00", name="alice")
    sink.clear()

    mod_say(dispatcher, "!bet start")
    assert sink.texts() == [bet.STARTED]
    assert registry.get(CHANNEL).bets == {}


@pytest.mark.parametrize("text", ["!bet start", "!bet close", "!bet end 10:00"])
def test_unauthorized_is_silent_by_default(text):
    dispatcher, registry, sink = make_dispatcher()
    assert say(dispatcher, text, name="viewer") is None
    assert sink.sent == []
    assert registry.get(CHANNEL) is None


@pytest.mark.parametrize("text", ["!bet start", "!bet close", "!bet end 10:00"])
def test_unauthorized_is_denied_with_deny_policy(text):
    dispatcher, registry, sink = make_dispatcher(unauthorized_policy="deny")
    response = say(dispatcher, text, name="viewer")
    assert not response.success
    assert sink.texts() == [f"viewer -> {bet.NOT_ALLOWED}"]
    assert registry.get(CHANNEL) is None


def test_unauthorized_cannot_end_running_round():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start")
    say(dispatcher, "!bet end 10:00", name="viewer")
    assert registry.get(CHANNEL) is not None


def test_owner_and_superuser_may_start():
    dispatcher, registry, sink = make_dispatcher(superusers=["operator"])
    say(dispatcher, "!bet start", name="streamer", roles=[Role.OWNER], channel="one")
    say(dispatcher, "!bet start", name="Operator", channel="two")
    assert registry.channels() == ["one", "two"]


def test_bare_bet_is_ignored():
    dispatcher, registry, sink = make_dispatcher()
    assert mod_say(dispatcher, "!bet") is None
    assert sink.sent == []


def test_unknown_command_reply():
    dispatcher, registry, sink = make_dispatcher()
    response = say(dispatcher, "!dance now", name="alice")
    assert not response.success
    assert sink.texts() == ["alice -> Unknown command."]


def test_unknown_command_reply_can_be_disabled():
    dispatcher, registry, sink = make_dispatcher(unknown_command_reply=False)
    assert say(dispatcher, "!dance now", name="alice") is None
    assert sink.sent == []


def test_help_lists_commands():
    dispatcher, registry, sink = make_dispatcher()
    say(dispatcher, "!help", name="alice")
    texts = sink.texts()
    assert texts[0] == "alice -> Available commands:"
    assert any(line.startswith("!bet ") for line in texts)
    assert any(line.startswith("!help ") for line in texts)


def test_help_rejects_arguments():
    dispatcher, registry, sink = make_dispatcher()
    say(dispatcher, "!help me", name="alice")
    assert sink.texts() == ["alice -> Invalid arguments: The help command takes no arguments"]


def test_rounds_are_isolated_per_channel():
    dispatcher, registry, sink = make_dispatcher()
    mod_say(dispatcher, "!bet start", channel="one")
    say(dispatcher, "!bet 10:00", name="alice", channel="two")
    assert sink.sent[-1] == ("two", f"alice -> {bet.NO_ACTIVE_BIDDING}")
    assert registry.get("one").bets == {}


def test_send_failure_does_not_break_dispatch():
    registry = RoundRegistry()
    dispatcher = CommandDispatcher(registry, FailingSink(), BotConfig())
    response = mod_say(dispatcher, "!bet start")
    assert response.success
    assert registry.get(CHANNEL) is not None


def test_execute_does_not_send():
    dispatcher, registry, sink = make_dispatcher()
    event = ChatEvent(channel=CHANNEL, text="!bet start", actor=Actor(display_name="mod", roles={Role.MODERATOR}))
    response = asyncio.run(dispatcher.execute(event))
    assert response.message == bet.STARTED
    assert response.response_type == "announce"
    assert sink.sent == []


def test_config_rejects_unknown_policy():
    with pytest.raises(ValueError):
        BotConfig(unauthorized_policy="sometimes")


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("CHATBETS_SUPERUSERS", "op1, op2")
    monkeypatch.setenv("CHATBETS_UNKNOWN_COMMAND_REPLY", "false")
    monkeypatch.setenv("CHATBETS_UNAUTHORIZED_POLICY", "DENY")
    monkeypatch.setenv("CHATBETS_PORT", "9000")
    config = BotConfig.from_env()
    assert config.superusers == ["op1", "op2"]
    assert config.unknown_command_reply is False
    assert config.unauthorized_policy == "deny"
    assert config.port == 9000
    assert config.introduction == "chatbets v1.0 loaded."


def test_factory_builds_builtin_commands():
    factory = build_command_factory()
    assert sorted(factory.get_all_commands()) == ["bet", "help"]
    assert isinstance(factory.create("bet"), BetCommand)
    with pytest.raises(KeyError):
        factory.create("dance")


def test_factories_are_independent():
    factory = CommandFactory()
    factory.register(BetCommand)
    assert "bet" in factory
    assert "help" not in factory
    assert "bet" not in CommandFactory()


def test_factory_rejects_duplicate_name():
    class OtherBet(HelpCommand):
        @property
        def name(self) -> str:
            return "bet"

    factory = CommandFactory()
    factory.register(BetCommand)
    factory.register(BetCommand)
    with pytest.raises(ValueError):
        factory.register(OtherBet)


def test_dispatcher_uses_injected_commands():
    factory = CommandFactory()
    factory.register(BetCommand)
    registry = RoundRegistry()
    sink = RecordingSink()
    dispatcher = CommandDispatcher(registry, sink, BotConfig(), commands=factory)

    say(dispatcher, "!help", name="alice")
    assert sink.texts() == ["alice -> Unknown command."]

    sink.clear()
    mod_say(dispatcher, "!bet start")
    assert sink.texts() == [bet.STARTED]


def test_help_lists_only_injected_commands():
    factory = CommandFactory()
    factory.register(HelpCommand)
    dispatcher = CommandDispatcher(RoundRegistry(), RecordingSink(), BotConfig(), commands=factory)
    say(dispatcher, "!help", name="alice")
    assert not any(line.startswith("!bet") for line in dispatcher.sink.texts())


def test_channel_locks_are_released_without_round():
    dispatcher, registry, sink = make_dispatcher()
    for channel in ["a", "b", "c"]:
        say(dispatcher, "!bet 10:00", name="alice", channel=channel)
    assert registry.lock_channels() == []

    mod_say(dispatcher, "!bet start", channel="a")
    assert registry.lock_channels() == ["a"]
    mod_say(dispatcher, "!bet end 10:00", channel="a")
    assert registry.lock_channels() == []
