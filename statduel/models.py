from datetime import datetime, timezone

from statduel import db


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class HighScore(db.Model):
    """A finished streak. Rows are only ever inserted."""
    __tablename__ = 'high_scores'
    __table_args__ = (
        db.CheckConstraint('streak >= 0', name='ck_high_scores_streak_non_negative'),
    )
    id = db.Column(db.Integer, primary_key=True)
    streak = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'streak': self.streak,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


db.Index('index_high_scores_on_streak', HighScore.__table__.c.streak.desc())
