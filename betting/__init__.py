"""
Betting round core: time parsing, authorization, round registry and arbiter.
"""

from betting.models import Actor, BettingRound, ChatEvent, Role, RoundState
from betting.registry import RoundRegistry
from betting.service import RoundService
from betting.arbiter import resolve
from betting.times import parse_times, format_time

__all__ = [
    'Actor',
    'BettingRound',
    'ChatEvent',
    'Role',
    'RoundState',
    'RoundRegistry',
    'RoundService',
    'resolve',
    'parse_times',
    'format_time',
]
