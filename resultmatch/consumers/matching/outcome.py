"""Outcome resolution.

Turns a concluded RawResult into the outcome the prediction game scores
(home win, away win, draw) and the effective score used for goal buckets.

Shootouts are the tricky case: a match decided on penalties is a draw for
the game, and only the regulation score counts toward goals. Penalty
goals never expand the goal total.
"""

from typing import NamedTuple

from resultmatch.config import GoalBuckets
from resultmatch.core.types import Outcome, RawResult, ResultStatus


class ResolvedOutcome(NamedTuple):
    """Outcome plus the effective score behind it."""

    outcome: Outcome
    home_goals: int
    away_goals: int

    @property
    def total_goals(self) -> int:
        return self.home_goals + self.away_goals


def outcome_from_score(home: int, away: int) -> Outcome:
    if home > away:
        return Outcome.HOME_WIN
    if home < away:
        return Outcome.AWAY_WIN
    return Outcome.DRAW


def resolve(result: RawResult) -> ResolvedOutcome:
    """Resolve a result into (outcome, effective home goals, effective away goals).

    - Shootout with both regulation scores: draw, regulation score
    - Anything else: outcome from the reported score, reported score as is

    Pure function; resolving the same result twice gives the same answer.
    """
    if result.status == ResultStatus.SHOOTOUT and result.has_regulation_score:
        return ResolvedOutcome(
            Outcome.DRAW,
            result.home_regulation_score,
            result.away_regulation_score,
        )

    return ResolvedOutcome(
        outcome_from_score(result.home_score, result.away_score),
        result.home_score,
        result.away_score,
    )


def derive_goal_buckets(resolved: ResolvedOutcome, buckets: GoalBuckets) -> tuple[str, str]:
    """Bucket labels for each side's effective goals.

    Returns:
        (home label, away label)
    """
    return buckets.label_for(resolved.home_goals), buckets.label_for(resolved.away_goals)
