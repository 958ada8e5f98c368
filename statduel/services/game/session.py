"""Per-player game state and its transitions.

``SessionState`` is plain data that round-trips through the session cookie.
``GameSession`` wraps one state for the duration of a request and is the only
thing that mutates it.

States, derived from the fields:

- awaiting guess: ``current_round`` set, not ``game_over``
- showing correct result: ``pending_result`` set, cleared on first read
- game over: ``game_over`` with ``result`` and ``result_round`` kept for display
"""
import random
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Optional

from statduel.dataset import Dataset
from .evaluation import GuessOutcome, evaluate_guess
from .selection import DEFAULT_MAX_ATTEMPTS, Round, select_round


@dataclass(frozen=True)
class ResultSnapshot:
    left: str
    right: str
    indicator: str
    left_value: float
    right_value: float
    winner: Optional[str]
    correct: bool
    indicator_year: Optional[int] = None
    streak: int = 0

    def to_dict(self) -> dict:
        return {
            'left': self.left,
            'right': self.right,
            'indicator': self.indicator,
            'left_value': self.left_value,
            'right_value': self.right_value,
            'winner': self.winner,
            'correct': self.correct,
            'indicator_year': self.indicator_year,
            'streak': self.streak,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional['ResultSnapshot']:
        if not data:
            return None
        return cls(**{k: data.get(k) for k in ('left', 'right', 'indicator', 'left_value',
                                               'right_value', 'winner', 'correct')},
                   indicator_year=data.get('indicator_year'), streak=int(data.get('streak') or 0))


@dataclass
class SessionState:
    streak: int = 0
    current_round: Optional[Round] = None
    previous_winner: Optional[str] = None
    game_over: bool = False
    pending_result: Optional[ResultSnapshot] = None
    result: Optional[GuessOutcome] = None
    result_round: Optional[Round] = None

    def to_dict(self) -> dict:
        return {
            'streak': self.streak,
            'current_round': self.current_round.to_dict() if self.current_round else None,
            'previous_winner': self.previous_winner,
            'game_over': self.game_over,
            'pending_result': self.pending_result.to_dict() if self.pending_result else None,
            'result': self.result.to_dict() if self.result else None,
            'result_round': self.result_round.to_dict() if self.result_round else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'SessionState':
        if not data:
            return cls()
        result = data.get('result')
        return cls(
            streak=max(0, int(data.get('streak') or 0)),
            current_round=Round.from_dict(data.get('current_round')),
            previous_winner=data.get('previous_winner'),
            game_over=bool(data.get('game_over')),
            pending_result=ResultSnapshot.from_dict(data.get('pending_result')),
            result=GuessOutcome(**result) if result else None,
            result_round=Round.from_dict(data.get('result_round')),
        )

    def copy(self) -> 'SessionState':
        return replace(self)


HighScoreRecorder = Callable[[int], Any]


def _no_recorder(streak: int) -> None:
    return None


@dataclass
class GameSession:
    state: SessionState
    dataset: Dataset
    rng: Any = field(default_factory=random.Random)
    record_high_score: HighScoreRecorder = _no_recorder
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def _select(self) -> Round:
        return select_round(self.dataset, self.state.previous_winner, rng=self.rng,
                            max_attempts=self.max_attempts)

    def serve_round(self) -> Optional[Round]:
        """Make sure a round is waiting and return it.

        Does nothing while a result is pending or the game is over; the
        current round (possibly ``None``) is returned either way.
        """
        st = self.state
        if st.current_round is None and not st.game_over and st.pending_result is None:
            st.current_round = self._select()
        return st.current_round

    def submit_guess(self, round_: Round, guessed_country: Optional[str]) -> GuessOutcome:
        """Score a guess on ``round_`` and move the state forward.

        Raises ``DataIntegrityError`` for a round the dataset cannot score,
        leaving the state untouched. A miss while the game is already over
        keeps the game-over screen without recording the streak again.
        """
        outcome = evaluate_guess(self.dataset, round_, guessed_country)
        st = self.state

        if outcome.correct:
            st.streak += 1
            st.previous_winner = outcome.winner
            st.game_over = False
            st.result = None
            st.result_round = None
            st.current_round = self._select()
            st.pending_result = self._snapshot(round_, outcome)
            return outcome

        if st.streak > 0 and not st.game_over:
            self.record_high_score(st.streak)
        st.game_over = True
        st.result = outcome
        st.result_round = round_
        st.pending_result = None
        return outcome

    def restart(self) -> None:
        st = self.state
        st.game_over = False
        st.result = None
        st.result_round = None
        st.previous_winner = None
        st.current_round = None
        st.pending_result = None
        st.streak = 0

    def consume_pending_result(self) -> Optional[ResultSnapshot]:
        """Hand out the last correct result once, then forget it."""
        snapshot = self.state.pending_result
        self.state.pending_result = None
        return snapshot

    def _snapshot(self, round_: Round, outcome: GuessOutcome) -> ResultSnapshot:
        return ResultSnapshot(
            left=round_.left,
            right=round_.right,
            indicator=round_.indicator,
            left_value=outcome.left_value,
            right_value=outcome.right_value,
            winner=outcome.winner,
            correct=outcome.correct,
            indicator_year=self.dataset.indicator_year(round_.indicator),
            streak=self.state.streak,
        )
