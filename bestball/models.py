"""Data models for the playoff best ball scorer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from .constants import Position, RosterSlot


class Confidence(str, Enum):
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'


class ProjectionBasis(str, Enum):
    PLAYOFF_AVG = 'playoff_avg'
    POSITION_AVG = 'position_avg'


@dataclass(frozen=True)
class Player:
    """A fantasy player (a DST is one player per NFL team)."""
    id: str
    name: str
    position: Position
    team: Optional[str] = None


@dataclass
class PlayerScore:
    """Container for a player's score for one week."""
    player_id: str
    week: int
    year: int
    total_points: float = 0.0
    breakdown: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Substitution:
    """Replacement of an injured player in one roster slot.

    The substitute's points count from ``effective_week`` onward; earlier
    weeks still belong to the original player.
    """
    slot: RosterSlot
    original_player_id: str
    substitute_player_id: str
    effective_week: int
    year: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class WeeklyPoints:
    week: int
    points: float
    player_id: Optional[str] = None


@dataclass(frozen=True)
class SubstitutionSummary:
    """Points split around a substitution's effective week."""
    original_points_before: float
    substitute_points_after: float
    combined_points: float


@dataclass(frozen=True)
class LineupSlot:
    """A player placed in a lineup slot for one week."""
    slot: RosterSlot
    player: Player
    points: float
    roster_slot: RosterSlot  # Slot the player was drafted into


@dataclass(frozen=True)
class BestBallLineup:
    week: int
    starters: Tuple[LineupSlot, ...]
    bench: Tuple[LineupSlot, ...]
    total_points: float


@dataclass(frozen=True)
class BestBallTotals:
    weekly_totals: Tuple[WeeklyPoints, ...]
    total: float


@dataclass(frozen=True)
class ProjectionResult:
    projected_points: float
    confidence: Confidence
    basis: ProjectionBasis
    games_played: int
    projected_stats: Optional[Dict[str, float]] = None


@dataclass
class OwnerStanding:
    """Leaderboard row for one owner."""
    owner_id: str
    owner_name: str
    total_points: float = 0.0
    best_ball_points: float = 0.0
    weekly_best_ball: list[WeeklyPoints] = field(default_factory=list)
    projected_points: float = 0.0
    expected_value: float = 0.0
    rank: int = 0
