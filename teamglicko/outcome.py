"""match outcomes from the point of view of the first competitor (or team)"""
import math
from enum import Enum
from numbers import Real
from teamglicko.exceptions import InvalidOutcomeError


class Outcome(float, Enum):
    """outcome values as they enter the glicko-2 sums"""

    WIN = 1.0
    LOSS = 0.0
    TIE = 0.5

    @classmethod
    def coerce(cls, value):
        """accept an Outcome or one of the raw values 1, 0 and 0.5"""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidOutcomeError(f'outcome must be a number in (1, 0, 0.5), got {value!r}')
        try:
            return cls(float(value))
        except ValueError:
            raise InvalidOutcomeError(f'outcome must be one of 1, 0 or 0.5, got {value!r}') from None


def negate_outcome(outcome):
    """the same result seen from the other side: win <-> loss, tie stays a tie"""
    outcome = Outcome.coerce(outcome)
    if outcome is Outcome.WIN:
        return Outcome.LOSS
    if outcome is Outcome.LOSS:
        return Outcome.WIN
    return Outcome.TIE


def outcome_from_scores(a_score, b_score):
    """
    Maps a game score such as (3, 1) to the outcome for side a.

    Parameters:
        a_score (Real): non-negative score of side a
        b_score (Real): non-negative score of side b

    Returns:
        Outcome: WIN if a_score > b_score, LOSS if a_score < b_score, TIE otherwise
    """
    for score in (a_score, b_score):
        if isinstance(score, bool) or not isinstance(score, Real) or math.isnan(score):
            raise InvalidOutcomeError(f'scores must be numbers, got {score!r}')
        if score < 0:
            raise InvalidOutcomeError(f'scores must be non-negative, got {score!r}')
    if a_score > b_score:
        return Outcome.WIN
    if a_score < b_score:
        return Outcome.LOSS
    return Outcome.TIE
