from contextlib import contextmanager

from flask import current_app

from statduel import get_dataset, get_rng
from .highscores import record_high_score
from .session import GameSession
from .store import SessionStore


@contextmanager
def game_session():
    """Run one state transition against the caller's session.

    Works on a copy of the stored state and writes it back only if the block
    finishes, so a rejected request leaves the session as it was.
    """
    store = SessionStore()
    state = store.load().copy()
    gs = GameSession(
        state=state,
        dataset=get_dataset(),
        rng=get_rng(),
        record_high_score=record_high_score,
        max_attempts=int(current_app.config.get('ROUND_SELECTION_MAX_ATTEMPTS', 500)),
    )
    yield gs
    store.save(gs.state)
