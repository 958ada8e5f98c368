from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from statduel import db
from statduel.models import HighScore


def record_high_score(streak: int) -> Optional[HighScore]:
    """Append a finished streak.

    Zero streaks are not stored. A failed write is logged and rolled back so
    the caller's game-over transition still completes.
    """
    if streak <= 0:
        return None
    entry = HighScore(streak=int(streak))
    try:
        db.session.add(entry)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[highscore-failed] streak={streak} error={exc}")
        return None
    current_app.logger.info(f"[highscore] id={entry.id} streak={entry.streak}")
    return entry


def best_in_window(window: Optional[timedelta] = None, now: Optional[datetime] = None) -> Tuple[int, Optional[datetime]]:
    """Return ``(streak, created_at)`` of the best score inside the trailing window.

    Defaults to ``HIGH_SCORE_WINDOW_DAYS``. ``(0, None)`` when nothing qualifies.
    """
    if window is None:
        window = timedelta(days=int(current_app.config.get('HIGH_SCORE_WINDOW_DAYS', 7)))
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    record = (
        HighScore.query
        .filter(HighScore.created_at >= now - window)
        .order_by(HighScore.streak.desc())
        .first()
    )
    if record is None:
        return 0, None
    return record.streak, record.created_at
