"""Combine weekly scores across a roster slot's substitution."""

from typing import Iterable, Mapping, Optional, Sequence, Union

from .constants import PLAYOFF_WEEKS
from .models import PlayerScore, Substitution, SubstitutionSummary, WeeklyPoints
from .scoring import round_points

ScoresLike = Union[Mapping[int, float], Iterable[PlayerScore]]


def scores_by_week(scores: Optional[ScoresLike]) -> dict[int, float]:
    """Index scores by week. Accepts a week -> points mapping or PlayerScore records."""
    if scores is None:
        return {}
    if isinstance(scores, Mapping):
        return {int(week): float(points) for week, points in scores.items()}
    return {score.week: score.total_points for score in scores}


class ScoreAggregator:
    """
    Weekly points for one roster slot, honoring at most one substitution.

    Weeks before the substitution's effective week come from the original
    player; the effective week and later come from the substitute. Weeks
    without a score count as 0. The substitution is trusted as given.
    """

    def __init__(
        self,
        original_scores: Optional[ScoresLike],
        substitution: Optional[Substitution] = None,
        substitute_scores: Optional[ScoresLike] = None,
        weeks: Sequence[int] = PLAYOFF_WEEKS,
        original_player_id: Optional[str] = None,
    ):
        self.original_scores = scores_by_week(original_scores)
        self.substitute_scores = scores_by_week(substitute_scores)
        self.substitution = substitution
        self.weeks = tuple(sorted(weeks))
        if original_player_id is None and substitution is not None:
            original_player_id = substitution.original_player_id
        self.original_player_id = original_player_id

    def uses_substitute(self, week: int) -> bool:
        return self.substitution is not None and week >= self.substitution.effective_week

    def effective_player_id(self, week: int) -> Optional[str]:
        if self.uses_substitute(week):
            return self.substitution.substitute_player_id
        return self.original_player_id

    def effective_points(self, week: int) -> float:
        if self.uses_substitute(week):
            return self.substitute_scores.get(week, 0.0)
        return self.original_scores.get(week, 0.0)

    def total_points(self) -> float:
        return round_points(sum(self.effective_points(week) for week in self.weeks))

    def weekly_breakdown(self) -> list[WeeklyPoints]:
        """Points per contest week, ascending, from whichever player is effective."""
        return [
            WeeklyPoints(
                week=week,
                points=self.effective_points(week),
                player_id=self.effective_player_id(week),
            )
            for week in self.weeks
        ]

    def substitution_summary(self) -> Optional[SubstitutionSummary]:
        """
        Split the slot's points around the substitution.

        Returns:
            SubstitutionSummary, or None if the slot has no substitution
        """
        if self.substitution is None:
            return None

        effective_week = self.substitution.effective_week
        before = round_points(
            sum(self.original_scores.get(week, 0.0) for week in self.weeks if week < effective_week)
        )
        after = round_points(
            sum(self.substitute_scores.get(week, 0.0) for week in self.weeks if week >= effective_week)
        )
        return SubstitutionSummary(
            original_points_before=before,
            substitute_points_after=after,
            combined_points=round_points(before + after),
        )
