"""
Structured form of the arguments to the ``bet`` command.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class End:
    """Resolve the round; ``args`` are the raw final answer tokens."""
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlaceBet:
    """Record a bet; ``args`` are the raw guess tokens."""
    args: tuple[str, ...]


BetAction = Union[Start, Close, End, PlaceBet]

SUBCOMMANDS = {
    "start": Start,
    "close": Close,
}


def parse_action(args: list[str]) -> Optional[BetAction]:
    """
    Turn ``bet`` arguments into an action.

    Example:
        ["start"] -> Start()
        ["end", "10:00"] -> End(("10:00",))
        ["10:00", "10:15"] -> PlaceBet(("10:00", "10:15"))
        [] -> None
    """
    if not args:
        return None
    word = args[0].lower()
    if word in SUBCOMMANDS:
        return SUBCOMMANDS[word]()
    if word == "end":
        return End(tuple(args[1:]))
    return PlaceBet(tuple(args))
