"""
Errors raised by the betting core and turned into chat replies by the bet command.
"""


class BettingError(Exception):
    """Base class for recoverable betting errors."""


class ParseFailure(BettingError):
    """Command arguments could not be read."""


class TimeParseError(ParseFailure):
    """A time token is not a valid HH:MM time of day."""

    def __init__(self, token: str):
        super().__init__(f"Invalid time: {token!r}")
        self.token = token


class NoActiveRound(BettingError):
    """The channel has no betting round."""

    def __init__(self, channel: str):
        super().__init__(f"No active betting round on {channel}")
        self.channel = channel


class AlreadyActive(BettingError):
    """A betting round already exists on the channel."""

    def __init__(self, channel: str):
        super().__init__(f"Betting round already active on {channel}")
        self.channel = channel


class RoundClosed(BettingError):
    """The round no longer accepts bets."""


class Unauthorized(BettingError):
    """Privileged operation attempted by an unprivileged actor."""


class MalformedCommand(BettingError):
    """Required arguments are missing."""
