from dataclasses import dataclass
from typing import Optional

from statduel.dataset import Dataset
from .selection import Round


class DataIntegrityError(Exception):
    """A round points at a country/indicator value the dataset does not have."""


@dataclass(frozen=True)
class GuessOutcome:
    correct: bool
    winner: Optional[str]
    left_value: float
    right_value: float

    def to_dict(self) -> dict:
        return {
            'correct': self.correct,
            'winner': self.winner,
            'left_value': self.left_value,
            'right_value': self.right_value,
        }


def evaluate_guess(dataset: Dataset, round_: Round, guessed_country: Optional[str]) -> GuessOutcome:
    """Decide the winner of ``round_`` and whether the guess named it.

    A tie has no winner, so every guess on it is wrong.
    """
    left_value = dataset.value(round_.left, round_.indicator)
    right_value = dataset.value(round_.right, round_.indicator)
    if left_value is None or right_value is None:
        raise DataIntegrityError(
            f"Indicator value missing for {round_.left}/{round_.right} on {round_.indicator}"
        )

    if left_value == right_value:
        return GuessOutcome(False, None, left_value, right_value)

    winner = round_.left if left_value > right_value else round_.right
    return GuessOutcome(winner == guessed_country, winner, left_value, right_value)
