"""
Authorization check for privileged round operations.
"""

from collections.abc import Iterable

from betting.models import Actor, Role


def authorized(actor: Actor, superusers: Iterable[str] = ()) -> bool:
    """Owners, moderators and allowlisted superusers may manage rounds."""
    if actor.has_role(Role.OWNER) or actor.has_role(Role.MODERATOR):
        return True
    name = actor.display_name.lower()
    return any(name == user.lower() for user in superusers)
