import random
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from flask import current_app, has_app_context

from statduel.dataset import Dataset

DEFAULT_MAX_ATTEMPTS = 500


@dataclass(frozen=True)
class Round:
    left: str
    right: str
    indicator: str

    def to_dict(self) -> dict:
        return {'left': self.left, 'right': self.right, 'indicator': self.indicator}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional['Round']:
        if not data:
            return None
        return cls(left=data['left'], right=data['right'], indicator=data['indicator'])


def _log(level: str, message: str) -> None:
    # Also called without an app context
    if has_app_context():
        getattr(current_app.logger, level)(message)


def _fallback_round(dataset: Dataset, previous_winner: Optional[str]) -> Round:
    """Deterministic scan used once random draws are exhausted.

    Keeps ``previous_winner`` on the left when it can be paired with anyone;
    otherwise takes the first comparable pair in file order. If the dataset
    holds no comparable pair at all, returns the first two countries with the
    first indicator, which will be rejected at guess time.
    """
    codes = dataset.country_codes
    lefts = [previous_winner] if dataset.has_country(previous_winner) else []
    lefts += [c for c in codes if c != previous_winner]
    for left in lefts:
        for right in codes:
            if right == left:
                continue
            shared = dataset.shared_indicators(left, right)
            if shared:
                return Round(left, right, shared[0])
    _log("warning", f"[round-fallback] no comparable pair in dataset of {len(codes)} countries")
    return Round(codes[0], codes[1], dataset.indicators[0])


def select_round(dataset: Dataset, previous_winner: Optional[str] = None, rng: Optional[random.Random] = None,
                 max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Round:
    """Pick two distinct countries and an indicator both of them define.

    When ``previous_winner`` is a known country it stays on the left and the
    opponent is drawn from everyone else; otherwise an unordered pair is
    drawn. ``rng`` only needs ``sample`` and ``choice``.
    """
    rng = rng or random
    codes = list(dataset.country_codes)
    keep_winner = dataset.has_country(previous_winner)
    others = [c for c in codes if c != previous_winner] if keep_winner else codes

    for _ in range(max_attempts):
        if keep_winner:
            left, right = previous_winner, rng.choice(others)
        else:
            left, right = rng.sample(codes, 2)
        available = dataset.shared_indicators(left, right)
        if available:
            return Round(left, right, rng.choice(available))

    _log("info", f"[round-exhausted] attempts={max_attempts} previous_winner={previous_winner}")
    return _fallback_round(dataset, previous_winner)
