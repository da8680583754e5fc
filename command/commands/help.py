"""
Help command implementation.
"""

from command.base import CommandBase, CommandContext, CommandResponse


class HelpCommand(CommandBase):
    """Display help information about available commands."""
    
    @property
    def name(self) -> str:
        return "help"
    
    @property
    def description(self) -> str:
        return "Show available commands"
    
    @property
    def usage(self) -> str:
        return "help"
    
    def validate(self, args: list[str]) -> tuple[bool, str]:
        """Help command takes no arguments."""
        if args:
            return False, "The help command takes no arguments"
        return True, ""
    
    async def execute(self, context: CommandContext, args: list[str]) -> CommandResponse:
        """Generate help message listing all available commands."""
        commands = context.commands.get_all_commands()
        marker = context.config.command_marker
        
        help_lines = ["Available commands:"]
        for cmd_name in sorted(commands.keys()):
            cmd = commands[cmd_name]
            help_lines.append(f"{marker}{cmd.usage} - {cmd.description}")
        
        return CommandResponse.reply(context, "\n".join(help_lines))
