"""
End-of-session summary: score percentage, outcome counts and a closing message.

A hand is worth at most 3 points, so the maximum score is 3 × hands played.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from bstutor.session.state import HandResult

MAX_POINTS_PER_HAND: int = 3


class PerformanceLevel(Enum):
    EXCELLENT = 90
    GREAT = 75
    GOOD = 60
    FAIR = 40
    NEEDS_WORK = 0


_LEVEL_MESSAGES: dict[PerformanceLevel, str] = {
    PerformanceLevel.EXCELLENT: (
        "Outstanding! You've mastered basic strategy. You're ready for the real tables!"
    ),
    PerformanceLevel.GREAT: (
        "Fantastic work! You're following basic strategy very well. Keep it up!"
    ),
    PerformanceLevel.GOOD: (
        "Nice job! You're getting the hang of basic strategy. "
        "A bit more practice and you'll be sharp."
    ),
    PerformanceLevel.FAIR: "Not bad! You're learning. Review the tough hands and try again.",
    PerformanceLevel.NEEDS_WORK: (
        "Keep practicing! Basic strategy takes time to memorize. Focus on the fundamentals."
    ),
}


def score_percentage(score: int, max_score: int) -> int:
    """Rounded percentage of the maximum score; 0 when nothing was playable.

    Examples:
        >>> score_percentage(45, 60)
        75
        >>> score_percentage(447, 600)
        75
        >>> score_percentage(0, 0)
        0
    """
    if max_score <= 0:
        return 0
    # Halves round up.
    return math.floor(score * 100 / max_score + 0.5)


def performance_level(percentage: int) -> PerformanceLevel:
    for level in PerformanceLevel:
        if percentage >= level.value:
            return level
    return PerformanceLevel.NEEDS_WORK


@dataclass(frozen=True)
class SessionSummary:
    score: int
    max_score: int
    percentage: int
    perfect: int
    good: int
    wrong: int
    level: PerformanceLevel

    @property
    def message(self) -> str:
        return _LEVEL_MESSAGES[self.level]

    @property
    def is_upbeat(self) -> bool:
        return self.level in (PerformanceLevel.EXCELLENT, PerformanceLevel.GREAT)


def summarize(history: Sequence[HandResult], total_hands: int) -> SessionSummary:
    """Build the summary for a (possibly unfinished) session."""
    score = sum(h.points_earned for h in history)
    max_score = total_hands * MAX_POINTS_PER_HAND
    percentage = score_percentage(score, max_score)
    return SessionSummary(
        score=score,
        max_score=max_score,
        percentage=percentage,
        perfect=sum(1 for h in history if h.points_earned == 3),
        good=sum(1 for h in history if h.points_earned == 1),
        wrong=sum(1 for h in history if h.points_earned == 0),
        level=performance_level(percentage),
    )
