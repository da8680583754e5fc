"""
Command dispatcher: turns inbound chat events into command executions and replies.
"""

import logging

from betting.models import ChatEvent
from betting.registry import RoundRegistry
from betting.service import RoundService
from command.base import CommandContext, CommandResponse, MessageSink
from command.factory import CommandFactory, build_command_factory
from command.router import CommandParser
from utils.types import BotConfig

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND = "Unknown command."


class CommandDispatcher:
    """Routes chat lines to registered commands and sends the responses."""

    def __init__(
        self,
        registry: RoundRegistry,
        sink: MessageSink,
        config: BotConfig | None = None,
        commands: CommandFactory | None = None,
    ):
        self.config = config or BotConfig()
        self.registry = registry
        self.sink = sink
        self.commands = commands if commands is not None else build_command_factory()
        self.parser = CommandParser(self.config.command_marker)
        self.service = RoundService(registry, replace_active_round=self.config.replace_active_round)

    async def execute(self, event: ChatEvent) -> CommandResponse | None:
        """
        Run the command in a chat event without sending anything.

        Returns:
            The response to deliver, or None when the line is not a command
            or the command stays silent
        """
        command_name, args = self.parser.parse(event.text)
        if not command_name:
            return None

        context = CommandContext(
            channel=event.channel,
            actor=event.actor,
            service=self.service,
            config=self.config,
            commands=self.commands,
        )

        try:
            command = self.commands.create(command_name)
        except KeyError:
            logger.debug(f"Unknown command {command_name!r} from {event.actor.display_name}")
            if not self.config.unknown_command_reply:
                return None
            return CommandResponse.reply(context, UNKNOWN_COMMAND, success=False)

        is_valid, error_msg = command.validate(args)
        if not is_valid:
            return CommandResponse.reply(context, f"Invalid arguments: {error_msg}", success=False)

        try:
            return await command.execute(context, args)
        except Exception as e:
            logger.error(f"Error executing {command_name} on {event.channel}: {e}", exc_info=True)
            return CommandResponse.reply(context, "Command execution error.", success=False)

    async def handle(self, event: ChatEvent) -> CommandResponse | None:
        """Execute a chat event and deliver its response to the channel."""
        if not self.parser.is_command(event.text):
            return None

        async with self.registry.locked(event.channel):
            response = await self.execute(event)
            if response is not None:
                await self.deliver(event.channel, response)
        return response

    async def deliver(self, channel: str, response: CommandResponse) -> None:
        for line in response.render():
            try:
                await self.sink.send(channel, line)
            except Exception as e:
                logger.error(f"Failed to send to {channel}: {e}")
