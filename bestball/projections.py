"""Projected points from past playoff performance."""

from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from .constants import AVERAGE_FG_POINTS, HIGH_CONFIDENCE_GAMES, PLAYOFF_WEEKS, POSITION_AVERAGES, Position
from .models import Confidence, ProjectionBasis, ProjectionResult, WeeklyPoints
from .rules import DEFAULT_SCORING_RULES
from .schemas import ScoringRules
from .scoring import round_points

PastScore = Union[Tuple[int, float], WeeklyPoints]


def _week_and_points(score: PastScore) -> Tuple[int, float]:
    if isinstance(score, WeeklyPoints):
        return score.week, score.points
    week, points = score
    return week, points


def position_average(position: Position | str) -> float:
    """Baseline points for a player with no playoff games yet."""
    return POSITION_AVERAGES[Position(position)]


def project(
    position: Position | str,
    past_scores: Iterable[PastScore],
    stat_lines: Optional[Mapping[int, Mapping[str, float]]] = None,
) -> ProjectionResult:
    """
    Project a player's points for an upcoming week.

    Only games with positive points count as played; a 0 is treated as
    no data rather than a bad game.

    Args:
        position: Player position (selects the fallback baseline)
        past_scores: (week, points) pairs or WeeklyPoints
        stat_lines: Optional week -> stat category -> value, used to
            project individual stats

    Returns:
        ProjectionResult with projected points, confidence and basis
    """
    played = [(week, points) for week, points in map(_week_and_points, past_scores) if points > 0]
    games_played = len(played)

    if games_played == 0:
        return ProjectionResult(
            projected_points=position_average(position),
            confidence=Confidence.LOW,
            basis=ProjectionBasis.POSITION_AVG,
            games_played=0,
        )

    average = sum(points for _, points in played) / games_played

    if games_played >= HIGH_CONFIDENCE_GAMES:
        confidence = Confidence.HIGH
    elif games_played == 1:
        confidence = Confidence.MEDIUM
    else:
        confidence = Confidence.LOW

    projected_stats = None
    if stat_lines:
        projected_stats = project_stats([stat_lines[week] for week, _ in played if week in stat_lines])

    return ProjectionResult(
        projected_points=round_points(average),
        confidence=confidence,
        basis=ProjectionBasis.PLAYOFF_AVG,
        games_played=games_played,
        projected_stats=projected_stats,
    )


def project_stats(stat_lines: Sequence[Mapping[str, float]]) -> Optional[dict[str, float]]:
    """
    Average each numeric stat category across games.

    Categories that never occurred are left out. Returns None when there is
    nothing to project.
    """
    if not stat_lines:
        return None

    totals: dict[str, float] = {}
    occurred: set[str] = set()
    for line in stat_lines:
        for category, value in line.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            totals[category] = totals.get(category, 0.0) + value
            if value:
                occurred.add(category)

    averages = {
        category: round_points(totals[category] / len(stat_lines))
        for category in totals
        if category in occurred
    }
    return averages or None


def expected_value(projected_points: float, win_probability: Optional[float]) -> Optional[float]:
    """Projected points weighted by the chance the player's team keeps playing."""
    if win_probability is None:
        return None
    return round_points(projected_points * win_probability)


def points_from_projected_stats(
    stats: Mapping[str, float], rules: ScoringRules = DEFAULT_SCORING_RULES
) -> float:
    """
    Score a projected (fractional) stat line.

    Field goals are valued at a flat average since projections carry no
    kick distances; ``dst_points`` is taken as already-scored DST points.
    """
    points = 0.0

    points += stats.get('pass_yards', 0) / rules.pass_yards_per_point
    points += stats.get('pass_td', 0) * rules.pass_td
    points -= stats.get('pass_int', 0) * abs(rules.pass_int)

    points += stats.get('rush_yards', 0) / rules.rush_yards_per_point
    points += stats.get('rush_td', 0) * rules.rush_td

    points += stats.get('rec_yards', 0) / rules.rec_yards_per_point
    points += stats.get('rec_td', 0) * rules.rec_td
    points += stats.get('receptions', 0) * rules.ppr

    points += stats.get('fg_made', 0) * AVERAGE_FG_POINTS
    points += stats.get('xp_made', 0) * rules.xp_made

    points += stats.get('dst_points', 0)

    return round_points(points)


def remaining_weeks(completed_weeks: Iterable[int], weeks: Sequence[int] = PLAYOFF_WEEKS) -> list[int]:
    """Contest weeks not yet completed."""
    completed = set(completed_weeks)
    return [week for week in weeks if week not in completed]
