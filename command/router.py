"""
Command parser for chat lines.
"""

import re

# Word-like runs; the colon keeps times such as 10:15 in one token
TOKEN_PATTERN = re.compile(r"[\w:]+")


class CommandParser:
    """Parse chat lines to extract command and arguments."""

    def __init__(self, marker: str = "!"):
        self.marker = marker

    def is_command(self, message: str) -> bool:
        """Check if message is a command (starts with the marker)."""
        return message.strip().startswith(self.marker)

    def tokenize(self, message: str) -> list[str]:
        """
        Split a command line into tokens.

        Returns an empty list for lines without the marker, or with nothing
        but punctuation after it.
        """
        if not self.is_command(message):
            return []
        command_text = message.strip()[len(self.marker):]
        return TOKEN_PATTERN.findall(command_text)

    def parse(self, message: str) -> tuple[str, list[str]]:
        """
        Parse command message into command name and arguments.
        
        Args:
            message: Chat line starting with the marker
            
        Returns:
            Tuple of (command_name, args_list)
            
        Example:
            "!bet 10:00 10:15" -> ("bet", ["10:00", "10:15"])
            "!bet end, 9:30!" -> ("bet", ["end", "9:30"])
            "!help" -> ("help", [])
        """
        tokens = self.tokenize(message)
        if not tokens:
            return "", []
        return tokens[0].lower(), tokens[1:]
