"""
Command system for the betting bot.
Provides base command class, factory, parser, dispatcher and command implementations.
"""

from command.base import CommandBase, CommandContext, CommandResponse, MessageSink
from command.factory import CommandFactory, build_command_factory
from command.router import CommandParser
from command.dispatcher import CommandDispatcher

__all__ = [
    'CommandBase',
    'CommandContext',
    'CommandResponse',
    'MessageSink',
    'CommandFactory',
    'build_command_factory',
    'CommandParser',
    'CommandDispatcher',
]
