from .constants import (
    FLEX_ELIGIBLE,
    PLAYOFF_WEEKS,
    POSITION_AVERAGES,
    REQUIRED_STARTERS,
    Position,
    RosterSlot,
)
from .models import (
    BestBallLineup,
    BestBallTotals,
    Confidence,
    LineupSlot,
    OwnerStanding,
    Player,
    PlayerScore,
    ProjectionBasis,
    ProjectionResult,
    Substitution,
    SubstitutionSummary,
    WeeklyPoints,
)
from .schemas import PlayerStats, ScoringRules
from .rules import DEFAULT_SCORING_RULES, field_goal_points, points_allowed_score
from .scoring import compute_points, round_points, score_player
from .aggregator import ScoreAggregator, scores_by_week
from .roster import RosterEntry, add_substitution, is_substitute_compatible, remove_substitution
from .best_ball import best_ball_totals, optimal_lineup, slot_accepts, total_best_ball_points
from .projections import (
    expected_value,
    points_from_projected_stats,
    position_average,
    project,
    remaining_weeks,
)
from .odds import GameOdds, moneyline_to_probability, remove_vig, team_win_probability
from .stats_loader import SeasonStats
from .standings import build_standings, load_rosters, load_week_odds, score_season

__all__ = [
    # Constants
    'FLEX_ELIGIBLE',
    'PLAYOFF_WEEKS',
    'POSITION_AVERAGES',
    'REQUIRED_STARTERS',
    'Position',
    'RosterSlot',
    # Models
    'BestBallLineup',
    'BestBallTotals',
    'Confidence',
    'LineupSlot',
    'OwnerStanding',
    'Player',
    'PlayerScore',
    'PlayerStats',
    'ProjectionBasis',
    'ProjectionResult',
    'ScoringRules',
    'Substitution',
    'SubstitutionSummary',
    'WeeklyPoints',
    # Point calculator
    'DEFAULT_SCORING_RULES',
    'compute_points',
    'field_goal_points',
    'points_allowed_score',
    'round_points',
    'score_player',
    # Score aggregator
    'ScoreAggregator',
    'scores_by_week',
    # Rosters
    'RosterEntry',
    'add_substitution',
    'is_substitute_compatible',
    'remove_substitution',
    # Best ball
    'best_ball_totals',
    'optimal_lineup',
    'slot_accepts',
    'total_best_ball_points',
    # Projections
    'expected_value',
    'points_from_projected_stats',
    'position_average',
    'project',
    'remaining_weeks',
    # Odds
    'GameOdds',
    'moneyline_to_probability',
    'remove_vig',
    'team_win_probability',
    # File-based standings
    'SeasonStats',
    'build_standings',
    'load_rosters',
    'load_week_odds',
    'score_season',
]
