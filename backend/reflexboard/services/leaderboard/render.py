from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

TITLE = '\U0001F3C6 Leaderboard: lowest average reaction time (ms)'
EMPTY_PLACEHOLDER = 'No results yet. Play with `/play`!'
EMBED_COLOR = 0x00AEEF


def render_line(rank: int, record) -> str:
    return f"**{rank}.** {record.username} — average **{record.avg_ms} ms**, best {record.best_ms} ms"


def render_leaderboard(records: Iterable, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Build the embed for a channel's leaderboard message.

    ``records`` must already be ranked. An empty ledger renders an invitation
    to play instead of an empty list.
    """
    lines = [render_line(i + 1, r) for i, r in enumerate(records)]
    now = now or datetime.now(timezone.utc)
    return {
        'title': TITLE,
        'description': '\n'.join(lines) if lines else EMPTY_PLACEHOLDER,
        'color': EMBED_COLOR,
        'timestamp': now.isoformat(),
    }
