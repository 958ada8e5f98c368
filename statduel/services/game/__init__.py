"""Game domain services: round selection, guess evaluation, session state
and high scores.

This package contains pure(ish) domain logic that should be imported by
HTTP routes, keeping transport concerns separated from core game mechanics.
Only ``highscores`` and ``store`` need a Flask app context.
"""
from .evaluation import DataIntegrityError, GuessOutcome, evaluate_guess
from .selection import Round, select_round
from .session import GameSession, ResultSnapshot, SessionState

__all__ = [
    'DataIntegrityError',
    'GameSession',
    'GuessOutcome',
    'ResultSnapshot',
    'Round',
    'SessionState',
    'evaluate_guess',
    'select_round',
]
