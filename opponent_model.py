# opponent_model.py
# Human skill tracking (exponential moving average) and skill-matched move selection.

from __future__ import annotations

import math
from bisect import bisect_left
from typing import Sequence, Tuple

DEFAULT_ALPHA = 0.4
DEFAULT_ESTIMATE = 0.5


def normalize_score(move_score: int, max_score: int, min_score: int) -> float:
    """Map a raw move score onto [-1, 1] relative to the scores on offer.

    Non-negative scores are a fraction of the best score, negative ones a
    fraction of the worst. With no positive score available (``max_score == 0``)
    only the sign counts.
    """
    if max_score == 0:
        return -1.0 if move_score < 0 else 1.0
    if move_score >= 0:
        return move_score / max_score
    return -move_score / min_score


def target_score(estimate: float, max_score: int, min_score: int) -> int:
    """Raw score a player of skill ``estimate`` would be expected to pick."""
    if estimate >= 0:
        return math.ceil(estimate * max_score)
    return math.floor(estimate * min_score)


def select_index(scores: Sequence[int], estimate: float) -> int:
    """Index into ``scores`` (sorted best first) of the move matching ``estimate``.

    An exact score match wins; otherwise the first lower score, or the last
    move when the target lies below every score.
    """
    if not scores:
        raise ValueError("no moves to select from")
    target = target_score(estimate, scores[0], scores[-1])
    idx = bisect_left([-s for s in scores], -target)
    return min(idx, len(scores) - 1)


class SkillModel:
    """Exponential moving average of how good the human's moves have been."""

    def __init__(self, alpha: float = DEFAULT_ALPHA, estimate: float = DEFAULT_ESTIMATE) -> None:
        self._alpha = DEFAULT_ALPHA
        self.alpha = alpha
        self.initial_estimate = estimate
        self.estimate = estimate

    @property
    def alpha(self) -> float:
        return self._alpha

    @alpha.setter
    def alpha(self, value: float) -> None:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"smoothing factor must be within [0, 1], got {value}")
        self._alpha = float(value)

    def reset(self) -> None:
        self.estimate = self.initial_estimate

    def update(self, observed: float) -> float:
        self.estimate += self._alpha * (observed - self.estimate)
        return self.estimate

    def observe(self, move_score: int, scores: Sequence[int]) -> Tuple[float, float, float]:
        """Fold the human's move into the estimate; returns (old, observed, new)."""
        old = self.estimate
        observed = normalize_score(move_score, scores[0], scores[-1])
        return old, observed, self.update(observed)

    def choose(self, scores: Sequence[int]) -> int:
        return select_index(scores, self.estimate)
