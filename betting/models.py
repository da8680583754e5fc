"""
Data structures for betting rounds and inbound chat events.
"""

from dataclasses import dataclass, field
from datetime import datetime, time
from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    OWNER = "owner"
    MODERATOR = "moderator"


class RoundState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class Actor(BaseModel):
    """The user who sent a chat line."""
    display_name: str
    roles: set[Role] = Field(default_factory=set)

    def has_role(self, role: Role) -> bool:
        return role in self.roles


class ChatEvent(BaseModel):
    """A single chat line delivered to the dispatcher."""
    channel: str
    text: str
    actor: Actor


@dataclass
class BettingRound:
    """One round of betting on a channel."""

    closed: bool = False
    bets: dict[str, list[time]] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def state(self) -> RoundState:
        return RoundState.CLOSED if self.closed else RoundState.OPEN

    def record(self, participant: str, times: list[time]) -> None:
        # a new submission replaces the previous one
        self.bets[participant] = list(times)

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "created_at": self.created_at.isoformat(),
            "bets": {
                name: [t.strftime("%H:%M") for t in times]
                for name, times in sorted(self.bets.items())
            },
        }
