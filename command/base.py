"""
Base class and data structures for command system.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from betting.models import Actor
from betting.service import RoundService
from utils.types import BotConfig

if TYPE_CHECKING:
    from command.factory import CommandFactory


class MessageSink(Protocol):
    """Outbound delivery of bot text to a channel."""

    async def send(self, channel: str, text: str) -> None:
        ...


@dataclass
class CommandContext:
    """Context passed to commands during execution."""
    channel: str
    actor: Actor
    service: RoundService
    config: BotConfig
    commands: "CommandFactory"


@dataclass
class CommandResponse:
    """Response returned by command execution."""
    success: bool
    message: str
    response_type: str = "info"  # "info", "error", "announce"
    target_user: str | None = None  # Reply addressed to one user

    def render(self) -> list[str]:
        """Chat lines for this response, one per line of the message."""
        lines = [line for line in self.message.splitlines() if line.strip()]
        if self.target_user and lines:
            lines[0] = f"{self.target_user} -> {lines[0]}"
        return lines

    @classmethod
    def reply(cls, context: CommandContext, message: str, success: bool = True) -> "CommandResponse":
        return cls(
            success=success,
            message=message,
            response_type="info" if success else "error",
            target_user=context.actor.display_name,
        )

    @classmethod
    def announce(cls, message: str) -> "CommandResponse":
        return cls(success=True, message=message, response_type="announce")


class CommandBase(ABC):
    """Abstract base class for all commands."""
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Command name (without the command marker)."""
        pass
    
    @property
    @abstractmethod
    def description(self) -> str:
        """Command description for help text."""
        pass
    
    @property
    @abstractmethod
    def usage(self) -> str:
        """Command usage format."""
        pass
    
    @abstractmethod
    def validate(self, args: list[str]) -> tuple[bool, str]:
        """
        Validate command arguments.
        
        Returns:
            Tuple of (is_valid, error_message)
        """
        pass
    
    @abstractmethod
    async def execute(self, context: CommandContext, args: list[str]) -> CommandResponse | None:
        """
        Execute the command.
        
        Args:
            context: Command execution context
            args: Parsed arguments
            
        Returns:
            CommandResponse with execution result, or None to stay silent
        """
        pass
