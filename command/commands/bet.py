"""
Bet command: opens, closes and resolves betting rounds and records bets.
"""

import logging

from betting import actions
from betting.auth import authorized
from betting.errors import AlreadyActive, MalformedCommand, NoActiveRound, TimeParseError, Unauthorized
from betting.times import parse_times
from command.base import CommandBase, CommandContext, CommandResponse

logger = logging.getLogger(__name__)

STARTED = "Betting has started! Place your bets below!"
CLOSED = "Betting has closed! Everyone, good luck!"
ENDED = "Betting has ended!"
WINNERS = "🎉 Congratulations to following winner(s):"
NO_WINNERS = "✨ Unfortunately no winners this time, good luck on the next betting round!"
NO_ACTIVE_BIDDING = "There is currently no active bidding!"
ALREADY_ACTIVE = "A betting round is already running! End it before starting a new one."
UNREADABLE_TIMES = "Could not read your time(s)."
END_USAGE = "Format: bet end [time...]"
NOT_ALLOWED = "You are not allowed to do that."

PRIVILEGED = (actions.Start, actions.Close, actions.End)


class BetCommand(CommandBase):
    """Run betting rounds: start, close, end, and place bets."""

    @property
    def name(self) -> str:
        return "bet"

    @property
    def description(self) -> str:
        return "Bet on times of day; moderators start, close and end rounds"

    @property
    def usage(self) -> str:
        return "bet <time> [time...] | bet start | bet close | bet end <time> [time...]"

    def validate(self, args: list[str]) -> tuple[bool, str]:
        """Sub-commands check their own arguments."""
        return True, ""

    async def execute(self, context: CommandContext, args: list[str]) -> CommandResponse | None:
        action = actions.parse_action(args)
        if action is None:
            return None

        try:
            if isinstance(action, PRIVILEGED):
                self._authorize(context, action)
            if isinstance(action, actions.Start):
                return self._start(context)
            if isinstance(action, actions.Close):
                return self._close(context)
            if isinstance(action, actions.End):
                return self._end(context, list(action.args))
            return self._place_bet(context, list(action.args))
        except NoActiveRound:
            return CommandResponse.reply(context, NO_ACTIVE_BIDDING, success=False)
        except AlreadyActive:
            return CommandResponse.reply(context, ALREADY_ACTIVE, success=False)
        except TimeParseError as e:
            logger.debug(f"Rejected {e.token!r} from {context.actor.display_name}")
            return CommandResponse.reply(context, UNREADABLE_TIMES, success=False)
        except MalformedCommand:
            return CommandResponse.reply(context, END_USAGE, success=False)
        except Unauthorized:
            if context.config.unauthorized_policy == "deny":
                return CommandResponse.reply(context, NOT_ALLOWED, success=False)
            return None

    def _authorize(self, context: CommandContext, action: actions.BetAction) -> None:
        if authorized(context.actor, context.config.superusers):
            return
        logger.info(
            f"Unauthorized {type(action).__name__.lower()} by "
            f"{context.actor.display_name} on {context.channel}"
        )
        raise Unauthorized(context.actor.display_name)

    def _start(self, context: CommandContext) -> CommandResponse:
        context.service.start(context.channel)
        return CommandResponse.announce(STARTED)

    def _close(self, context: CommandContext) -> CommandResponse:
        context.service.close(context.channel)
        return CommandResponse.announce(CLOSED)

    def _end(self, context: CommandContext, args: list[str]) -> CommandResponse:
        context.service.require(context.channel)
        if not args:
            raise MalformedCommand(END_USAGE)

        answers = parse_times(args)
        winners = context.service.end(context.channel, answers)

        lines = [ENDED]
        if winners:
            lines.append(WINNERS)
            lines.extend(f"🥳 - {winner}" for winner in winners)
        else:
            lines.append(NO_WINNERS)
        return CommandResponse.announce("\n".join(lines))

    def _place_bet(self, context: CommandContext, args: list[str]) -> CommandResponse | None:
        betting_round = context.service.require(context.channel)
        if betting_round.closed:
            return None
        times = parse_times(args)
        context.service.place_bet(context.channel, context.actor.display_name, times)
        return None
