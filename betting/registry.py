"""
Per-channel storage of betting rounds.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from betting.models import BettingRound


class RoundRegistry:
    """Owns the betting round of every channel, at most one per channel."""

    def __init__(self):
        self._rounds: dict[str, BettingRound] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    def get(self, channel: str) -> Optional[BettingRound]:
        return self._rounds.get(channel)

    def put(self, channel: str, betting_round: BettingRound) -> None:
        self._rounds[channel] = betting_round

    def remove(self, channel: str) -> Optional[BettingRound]:
        return self._rounds.pop(channel, None)

    def channels(self) -> list[str]:
        return sorted(self._rounds)

    def lock_channels(self) -> list[str]:
        """Channels that currently have a lock allocated."""
        return sorted(self._locks)

    @asynccontextmanager
    async def locked(self, channel: str) -> AsyncIterator[None]:
        """
        Hold the lock serializing commands on one channel.

        The registry itself does no locking; callers hold this while they
        read and change a channel's round. A lock is kept only while someone
        holds or waits for it, or while the channel has a round.
        """
        lock = self._locks.setdefault(channel, asyncio.Lock())
        self._lock_users[channel] = self._lock_users.get(channel, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[channel] -= 1
            if not self._lock_users[channel]:
                del self._lock_users[channel]
                if channel not in self._rounds:
                    del self._locks[channel]

    def __contains__(self, channel: str) -> bool:
        return channel in self._rounds

    def __len__(self) -> int:
        return len(self._rounds)
