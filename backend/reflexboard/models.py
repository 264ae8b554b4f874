from reflexboard import db


class ScoreRecord(db.Model):
    __tablename__ = 'score'
    channel_id = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(db.String(64), primary_key=True)
    username = db.Column(db.String(128), nullable=False)
    avg_ms = db.Column(db.Integer, nullable=False)
    best_ms = db.Column(db.Integer, nullable=False)
    updated_at = db.Column(db.BigInteger, nullable=False)  # epoch millis

    __table_args__ = (
        db.Index('ix_score_channel_rank', 'channel_id', 'avg_ms', 'best_ms'),
    )

    def to_dict(self):
        return {
            'channel_id': self.channel_id,
            'user_id': self.user_id,
            'username': self.username,
            'avg_ms': self.avg_ms,
            'best_ms': self.best_ms,
            'updated_at': self.updated_at,
        }


class Meta(db.Model):
    """Small key/value table; leaderboard message ids live here."""
    __tablename__ = 'meta'
    key = db.Column(db.String(128), primary_key=True)
    value = db.Column(db.Text, nullable=True)
