"""Domain services: play tokens, the score ledger, leaderboard sync and
score submission.

These are plain objects built once in the application factory and stored in
``app.extensions['reflexboard']``; HTTP routes, socket handlers and CLI
commands look them up there instead of constructing their own.
"""

from dataclasses import dataclass


@dataclass
class Services:
    tokens: 'TokenCache'
    ledger: 'ScoreLedger'
    synchronizer: 'LeaderboardSynchronizer'
    gateway: 'SubmissionGateway'
