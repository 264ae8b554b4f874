"""Leaderboard message rendering and synchronization.

The rendered leaderboard is a chat message the service does not own: users
can delete it and moderators can revoke permissions. A per-channel handle
in the ``meta`` table remembers the last message posted.
"""

from .handles import get_handle, handle_key, set_handle
from .render import EMPTY_PLACEHOLDER, render_leaderboard
from .sync import LeaderboardSynchronizer, ReconcileResult, plan_reconcile

__all__ = [
    'EMPTY_PLACEHOLDER',
    'LeaderboardSynchronizer',
    'ReconcileResult',
    'get_handle',
    'handle_key',
    'plan_reconcile',
    'render_leaderboard',
    'set_handle',
]
