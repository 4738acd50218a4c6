"""Point calculation from a normalized stat line."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .constants import Position
from .models import PlayerScore
from .rules import DEFAULT_SCORING_RULES, field_goal_points, points_allowed_score
from .schemas import PlayerStats, ScoringRules

RulesLike = Union[ScoringRules, Mapping[str, Any]]
StatsLike = Union[PlayerStats, Mapping[str, Any]]

_CENT = Decimal('0.01')


def round_points(points: float) -> float:
    """Round to 2 decimal places, halves away from zero."""
    return float(Decimal(repr(points)).quantize(_CENT, rounding=ROUND_HALF_UP))


def resolve_rules(rules: Optional[RulesLike]) -> ScoringRules:
    """Validate a rule mapping; raises ValidationError on missing or bad categories."""
    if rules is None:
        return DEFAULT_SCORING_RULES
    if isinstance(rules, ScoringRules):
        return rules
    return ScoringRules.from_mapping(rules)


def _add(breakdown: Dict[str, float], category: str, points: float) -> float:
    if points:
        breakdown[category] = points
    return points


def score_passing(stats: PlayerStats, rules: ScoringRules) -> Tuple[float, Dict[str, float]]:
    """
    Score passing.

    Scoring:
        - Passing yards: 1 point per ``pass_yards_per_point`` yards
        - Passing TDs: ``pass_td`` each
        - Interceptions thrown: penalty of ``|pass_int|`` each
    """
    breakdown: Dict[str, float] = {}
    points = 0.0
    points += _add(breakdown, 'pass_yards', stats.pass_yards / rules.pass_yards_per_point)
    points += _add(breakdown, 'pass_td', stats.pass_td * rules.pass_td)
    points += _add(breakdown, 'pass_int', -stats.pass_int * abs(rules.pass_int))
    return points, breakdown


def score_rushing(stats: PlayerStats, rules: ScoringRules) -> Tuple[float, Dict[str, float]]:
    breakdown: Dict[str, float] = {}
    points = 0.0
    points += _add(breakdown, 'rush_yards', stats.rush_yards / rules.rush_yards_per_point)
    points += _add(breakdown, 'rush_td', stats.rush_td * rules.rush_td)
    return points, breakdown


def score_receiving(stats: PlayerStats, rules: ScoringRules) -> Tuple[float, Dict[str, float]]:
    breakdown: Dict[str, float] = {}
    points = 0.0
    points += _add(breakdown, 'rec_yards', stats.rec_yards / rules.rec_yards_per_point)
    points += _add(breakdown, 'rec_td', stats.rec_td * rules.rec_td)
    points += _add(breakdown, 'receptions', stats.receptions * rules.ppr)
    return points, breakdown


def score_misc_offense(stats: PlayerStats, rules: ScoringRules) -> Tuple[float, Dict[str, float]]:
    """
    Score offensive events shared by every position.

    Scoring:
        - Two point conversions: ``two_pt_conv`` each
        - Fumbles lost: penalty of ``|fumble_lost|`` each
        - Kick/punt return TDs: ``return_td`` each
        - Offensive fumble return TDs: ``off_fum_ret_td`` each
    """
    breakdown: Dict[str, float] = {}
    points = 0.0
    points += _add(breakdown, 'two_pt_conv', stats.two_pt_conv * rules.two_pt_conv)
    points += _add(breakdown, 'fumbles_lost', -stats.fumbles_lost * abs(rules.fumble_lost))
    points += _add(breakdown, 'return_td', stats.return_td * rules.return_td)
    points += _add(breakdown, 'off_fum_ret_td', stats.off_fum_ret_td * rules.off_fum_ret_td)
    return points, breakdown


def score_kicking(stats: PlayerStats, rules: ScoringRules) -> Tuple[float, Dict[str, float]]:
    """
    Score a kicker.

    Scoring:
        - Made FGs by distance: 0-19, 20-29, 30-39, 40-49, 50+ yard buckets
        - Missed FGs: ``fg_miss`` each
        - Extra points made/missed: ``xp_made`` / ``xp_miss`` each
    """
    breakdown: Dict[str, float] = {}
    points = 0.0
    made = sum(field_goal_points(distance, True, rules) for distance in stats.fg_made)
    points += _add(breakdown, 'fg_made', made)
    missed = sum(field_goal_points(distance, False, rules) for distance in stats.fg_missed)
    points += _add(breakdown, 'fg_missed', missed)
    points += _add(breakdown, 'xp_made', stats.xp_made * rules.xp_made)
    points += _add(breakdown, 'xp_missed', stats.xp_missed * rules.xp_miss)
    return points, breakdown


def score_defense(stats: PlayerStats, rules: ScoringRules) -> Tuple[float, Dict[str, float]]:
    """
    Score a defense/special teams unit.

    Scoring:
        - Points allowed 0: ``pa_0`` | 1-6: ``pa_1_6`` | 7-13: ``pa_7_13``
          | 14-20: ``pa_14_20`` | 21-27: ``pa_21_27`` | 28-34: ``pa_28_34``
          | 35+: ``pa_35_plus``
        - Sacks, interceptions, fumble recoveries, safeties, blocked kicks,
          returned extra points and defensive/ST TDs at their coefficients
    """
    breakdown: Dict[str, float] = {}
    points = 0.0
    points += _add(breakdown, 'sacks', stats.sacks * rules.sack)
    points += _add(breakdown, 'interceptions', stats.interceptions * rules.def_int)
    points += _add(breakdown, 'fumbles_recovered', stats.fumbles_recovered * rules.fum_rec)
    points += _add(breakdown, 'defensive_td', stats.defensive_td * rules.dst_td)
    points += _add(breakdown, 'safeties', stats.safeties * rules.safety)
    points += _add(breakdown, 'blocked_kicks', stats.blocked_kicks * rules.block)
    points += _add(breakdown, 'xp_returned', stats.xp_returned * rules.xp_returned)

    if stats.points_allowed is not None:
        pa_pts = points_allowed_score(stats.points_allowed, rules)
        breakdown['points_allowed'] = pa_pts
        points += pa_pts

    return points, breakdown


def compute_points(
    stats: StatsLike,
    position: Position | str,
    rules: Optional[RulesLike] = None,
) -> Tuple[float, Dict[str, float]]:
    """
    Compute a player's fantasy points for one game.

    Every category is scored for every position, so a receiver's passing
    touchdown or a quarterback's catch still counts. The points-allowed tier
    only applies to a DST.

    Args:
        stats: Normalized stat line (PlayerStats or a mapping of stat fields)
        position: Player position
        rules: Scoring rules (defaults to DEFAULT_SCORING_RULES)

    Returns:
        Tuple of (total points rounded to 2 decimals, category breakdown)

    Raises:
        ValidationError: If the stat line or rule set is malformed
    """
    rules = resolve_rules(rules)
    if not isinstance(stats, PlayerStats):
        stats = PlayerStats.model_validate(stats)
    position = Position(position)

    sections = [
        score_passing(stats, rules),
        score_rushing(stats, rules),
        score_receiving(stats, rules),
        score_misc_offense(stats, rules),
        score_kicking(stats, rules),
    ]
    if position == Position.DST:
        sections.append(score_defense(stats, rules))
    else:
        # Individual players never carry a points-allowed line
        sections.append(score_defense(stats.model_copy(update={'points_allowed': None}), rules))

    total = 0.0
    breakdown: Dict[str, float] = {}
    for points, section in sections:
        total += points
        for category, value in section.items():
            breakdown[category] = round_points(value)

    return round_points(total), breakdown


def score_player(
    player_id: str,
    week: int,
    year: int,
    stats: StatsLike,
    position: Position | str,
    rules: Optional[RulesLike] = None,
) -> PlayerScore:
    """Score one player's game into a PlayerScore record."""
    total, breakdown = compute_points(stats, position, rules)
    return PlayerScore(
        player_id=player_id,
        week=week,
        year=year,
        total_points=total,
        breakdown=breakdown,
    )
