"""
Betting round state machine over a RoundRegistry.

Per channel: no round -> open -> closed -> removed.
"""

import logging
from datetime import time

from betting.arbiter import resolve
from betting.errors import AlreadyActive, NoActiveRound, RoundClosed
from betting.models import BettingRound
from betting.registry import RoundRegistry

logger = logging.getLogger(__name__)


class RoundService:
    """Round transitions for every channel held by a registry."""

    def __init__(self, registry: RoundRegistry, replace_active_round: bool = False):
        self.registry = registry
        self.replace_active_round = replace_active_round

    def require(self, channel: str) -> BettingRound:
        betting_round = self.registry.get(channel)
        if betting_round is None:
            raise NoActiveRound(channel)
        return betting_round

    def start(self, channel: str) -> BettingRound:
        """Open a new round, replacing the current one only when configured to."""
        previous = self.registry.get(channel)
        if previous is not None:
            if not self.replace_active_round:
                raise AlreadyActive(channel)
            logger.info(
                f"Replacing betting round on {channel}, "
                f"discarding {len(previous.bets)} bet(s)"
            )
        betting_round = BettingRound()
        self.registry.put(channel, betting_round)
        logger.info(f"Betting round started on {channel}")
        return betting_round

    def close(self, channel: str) -> BettingRound:
        betting_round = self.require(channel)
        betting_round.closed = True
        logger.info(f"Betting round closed on {channel} with {len(betting_round.bets)} bet(s)")
        return betting_round

    def end(self, channel: str, answers: list[time]) -> list[str]:
        """Resolve the round against the final answers and remove it."""
        betting_round = self.require(channel)
        winners = resolve(betting_round.bets, answers)
        self.registry.remove(channel)
        logger.info(f"Betting round ended on {channel}: {len(winners)} winner(s)")
        return winners

    def place_bet(self, channel: str, participant: str, times: list[time]) -> None:
        betting_round = self.require(channel)
        if betting_round.closed:
            raise RoundClosed(f"Betting round on {channel} is closed")
        betting_round.record(participant, times)
        logger.debug(f"Recorded bet on {channel} for {participant}: {times}")
