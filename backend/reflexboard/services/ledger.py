import time
from typing import Callable, List, Optional

from sqlalchemy import case

from reflexboard import db
from reflexboard.models import ScoreRecord
from reflexboard.services.upsert import dialect_insert


def _now_ms() -> int:
    return int(time.time() * 1000)


class ScoreLedger:
    """Per-channel best scores.

    ``merge`` keeps the lowest average and the lowest best time seen for a
    (channel, user) pair. The two minima are taken independently, so a stored
    record can combine the average of one run with the best time of another.
    That is intended. The merge is a single ``INSERT .. ON CONFLICT DO UPDATE``
    so concurrent submissions for the same key cannot lose an improvement.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms):
        self._clock = clock

    def merge(self, channel_id: str, user_id: str, username: str, avg_ms: int, best_ms: int) -> None:
        table = ScoreRecord.__table__
        stmt = dialect_insert(table).values(
            channel_id=channel_id,
            user_id=user_id,
            username=username,
            avg_ms=avg_ms,
            best_ms=best_ms,
            updated_at=self._clock(),
        )
        excluded = stmt.excluded
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.channel_id, table.c.user_id],
            set_={
                'username': excluded.username,
                'avg_ms': case((excluded.avg_ms < table.c.avg_ms, excluded.avg_ms), else_=table.c.avg_ms),
                'best_ms': case((excluded.best_ms < table.c.best_ms, excluded.best_ms), else_=table.c.best_ms),
                'updated_at': excluded.updated_at,
            },
        )
        try:
            db.session.execute(stmt)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    def top_n(self, channel_id: str, n: int) -> List[ScoreRecord]:
        return (
            ScoreRecord.query
            .filter_by(channel_id=channel_id)
            .order_by(ScoreRecord.avg_ms.asc(), ScoreRecord.best_ms.asc())
            .limit(n)
            .all()
        )

    def get(self, channel_id: str, user_id: str) -> Optional[ScoreRecord]:
        return db.session.get(ScoreRecord, (channel_id, user_id))
