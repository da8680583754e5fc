"""
Configuration for the betting bot.
"""

import os
from dataclasses import dataclass, field

VERSION = "1.0"

UNAUTHORIZED_POLICIES = ("silent", "deny")

TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_list(name: str) -> list[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUE_VALUES


@dataclass
class BotConfig:
    """Configuration for the chat bot."""

    bot_name: str = "chatbets"
    command_marker: str = "!"
    superusers: list[str] = field(default_factory=list)
    moderators: list[str] = field(default_factory=list)
    unknown_command_reply: bool = True
    unauthorized_policy: str = "silent"  # silent, deny
    replace_active_round: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self):
        if self.unauthorized_policy not in UNAUTHORIZED_POLICIES:
            raise ValueError(
                f"unauthorized_policy must be one of {UNAUTHORIZED_POLICIES}, "
                f"got {self.unauthorized_policy!r}"
            )
        if not self.command_marker:
            raise ValueError("command_marker cannot be empty")

    @property
    def introduction(self) -> str:
        return f"{self.bot_name} v{VERSION} loaded."

    @classmethod
    def from_env(cls) -> "BotConfig":
        """Build a configuration from CHATBETS_* environment variables."""
        return cls(
            bot_name=os.getenv("CHATBETS_BOT_NAME", "chatbets"),
            command_marker=os.getenv("CHATBETS_COMMAND_MARKER", "!"),
            superusers=_env_list("CHATBETS_SUPERUSERS"),
            moderators=_env_list("CHATBETS_MODERATORS"),
            unknown_command_reply=_env_bool("CHATBETS_UNKNOWN_COMMAND_REPLY", True),
            unauthorized_policy=os.getenv("CHATBETS_UNAUTHORIZED_POLICY", "silent").strip().lower(),
            replace_active_round=_env_bool("CHATBETS_REPLACE_ACTIVE_ROUND", False),
            log_level=os.getenv("CHATBETS_LOG_LEVEL", "INFO").upper(),
            host=os.getenv("CHATBETS_HOST", "0.0.0.0"),
            port=int(os.getenv("CHATBETS_PORT", "8000")),
        )
