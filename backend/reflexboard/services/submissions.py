import math

from flask import current_app

from reflexboard.errors import AuthorizationError, ValidationError
from reflexboard.services.ledger import ScoreLedger
from reflexboard.services.leaderboard import LeaderboardSynchronizer
from reflexboard.services.tokens import HolderContext, TokenCache

INVALID_PAYLOAD = 'invalid_payload'
INVALID_OR_EXPIRED_TOKEN = 'invalid_or_expired_token'
WRONG_RUN_LENGTH = 'wrong_run_length'
SERVER_ERROR = 'server_error'

# Reaction times outside this range (ms) are not real runs
MAX_RESULT_MS = 600_000


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


class SubmissionGateway:
    """Accepts one finished run per play token.

    Checks run in a fixed order and stop at the first failure: payload shape,
    then the token, then the run length. The token is consumed as soon as it
    is looked up, so it is spent even when the run length is wrong or the
    ledger write fails afterwards; the player asks for a new link in that case.
    """

    def __init__(self, tokens: TokenCache, ledger: ScoreLedger,
                 synchronizer: LeaderboardSynchronizer, required_run_length: int = 50):
        self.tokens = tokens
        self.ledger = ledger
        self.synchronizer = synchronizer
        self.required_run_length = required_run_length

    def submit(self, token, average, best, run_length) -> HolderContext:
        if not isinstance(token, str) or not token:
            raise ValidationError(INVALID_PAYLOAD)
        if not all(_is_number(v) for v in (average, best, run_length)):
            raise ValidationError(INVALID_PAYLOAD)
        if not all(0 <= v <= MAX_RESULT_MS for v in (average, best)):
            raise ValidationError(INVALID_PAYLOAD)

        holder = self.tokens.consume(token)
        if holder is None:
            raise AuthorizationError(INVALID_OR_EXPIRED_TOKEN)

        if run_length != self.required_run_length:
            raise ValidationError(WRONG_RUN_LENGTH)

        avg_ms = int(round(average))
        best_ms = int(round(best))
        self.ledger.merge(holder.channel_id, holder.user_id, holder.username, avg_ms, best_ms)
        current_app.logger.info(
            f"[score-accept] channel={holder.channel_id} user={holder.user_id} avg={avg_ms} best={best_ms}"
        )
        self.synchronizer.reconcile(holder.channel_id)
        return holder
