from typing import Optional

from reflexboard import db
from reflexboard.models import Meta
from reflexboard.services.upsert import dialect_insert


def handle_key(channel_id: str) -> str:
    return f'leaderboard:{channel_id}'


def get_handle(channel_id: str) -> Optional[str]:
    row = db.session.get(Meta, handle_key(channel_id))
    return row.value if row else None


def set_handle(channel_id: str, message_id: str) -> None:
    """Point the channel's leaderboard at ``message_id``, replacing any previous id."""
    table = Meta.__table__
    stmt = dialect_insert(table).values(key=handle_key(channel_id), value=message_id)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.key],
        set_={'value': stmt.excluded.value},
    )
    try:
        db.session.execute(stmt)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
