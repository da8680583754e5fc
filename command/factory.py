"""
Command factory: the set of chat commands one dispatcher answers to.
"""

from typing import Type

from command.base import CommandBase


class CommandFactory:
    """Registered command classes, looked up by command word."""

    def __init__(self):
        self._commands: dict[str, Type[CommandBase]] = {}

    def register(self, command_class: Type[CommandBase]) -> None:
        """
        Register a command class under its name.

        Raises:
            ValueError: If another command already uses the name
        """
        name = command_class().name.lower()
        if name in self._commands and self._commands[name] is not command_class:
            raise ValueError(f"Command already registered: {name}")
        self._commands[name] = command_class

    def create(self, command_name: str) -> CommandBase:
        """
        Create a command instance by name.

        Args:
            command_name: Command word without the marker, lower-cased

        Raises:
            KeyError: If command not found
        """
        if command_name not in self._commands:
            raise KeyError(f"Unknown command: {command_name}")
        return self._commands[command_name]()

    def get_all_commands(self) -> dict[str, CommandBase]:
        return {name: cmd_class() for name, cmd_class in self._commands.items()}

    def __contains__(self, command_name: str) -> bool:
        return command_name in self._commands


def build_command_factory() -> CommandFactory:
    """Factory holding the built-in commands (bet, help)."""
    # Lazy imports: the command modules import command.base
    from command.commands.bet import BetCommand
    from command.commands.help import HelpCommand

    factory = CommandFactory()
    factory.register(BetCommand)
    factory.register(HelpCommand)
    return factory
