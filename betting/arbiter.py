"""
Winner determination for a finished betting round.
"""

from datetime import time


def is_winner(guesses: list[time], answers: list[time]) -> bool:
    """A bet wins when its first len(answers) guesses equal the answers in order."""
    if len(guesses) < len(answers):
        return False
    return all(guess == answer for guess, answer in zip(guesses, answers))


def resolve(bets: dict[str, list[time]], answers: list[time]) -> list[str]:
    """
    Compute the winners of a round.

    Every participant whose bet is a prefix match of ``answers`` wins; there
    is no ranking and no partial credit. An empty answer list is matched by
    every bet.

    Returns:
        Winning participant names sorted alphabetically
    """
    return sorted(name for name, guesses in bets.items() if is_winner(guesses, answers))
