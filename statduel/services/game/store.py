from flask import session

from .session import SessionState

SESSION_KEY = 'game'


class SessionStore:
    """Keeps each player's ``SessionState`` in the signed session cookie."""

    def __init__(self, key: str = SESSION_KEY):
        self.key = key

    def load(self) -> SessionState:
        return SessionState.from_dict(session.get(self.key))

    def save(self, state: SessionState) -> None:
        session[self.key] = state.to_dict()
        session.modified = True

    def clear(self) -> None:
        session.pop(self.key, None)
