"""
Shared utilities for the betting bot.
"""

from utils.types import BotConfig, VERSION

__all__ = ['BotConfig', 'VERSION']
