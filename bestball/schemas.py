"""Pydantic schemas for scoring rules, stat lines and JSON data validation."""

import re
from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import PLAYOFF_WEEKS, WEEK_NAMES, Position, RosterSlot

# Rule names used by the original league rule table
RULE_ALIASES = {
    'passYardsPerPoint': 'pass_yards_per_point',
    'passTd': 'pass_td',
    'passInt': 'pass_int',
    'rushYardsPerPoint': 'rush_yards_per_point',
    'rushTd': 'rush_td',
    'recYardsPerPoint': 'rec_yards_per_point',
    'recTd': 'rec_td',
    'twoPtConv': 'two_pt_conv',
    'fumbleLost': 'fumble_lost',
    'returnTd': 'return_td',
    'offFumRetTd': 'off_fum_ret_td',
    'fg0_19': 'fg_0_19',
    'fg20_29': 'fg_20_29',
    'fg30_39': 'fg_30_39',
    'fg40_49': 'fg_40_49',
    'fg50Plus': 'fg_50_plus',
    'fgMiss': 'fg_miss',
    'fgMissMaxDistance': 'fg_miss_max_distance',
    'xpMade': 'xp_made',
    'xpMiss': 'xp_miss',
    'defInt': 'def_int',
    'fumRec': 'fum_rec',
    'dstTd': 'dst_td',
    'xpReturned': 'xp_returned',
    'pa0': 'pa_0',
    'pa1_6': 'pa_1_6',
    'pa7_13': 'pa_7_13',
    'pa14_20': 'pa_14_20',
    'pa21_27': 'pa_21_27',
    'pa28_34': 'pa_28_34',
    'pa35Plus': 'pa_35_plus',
}

POINTS_ALLOWED_TIERS = ('pa_0', 'pa_1_6', 'pa_7_13', 'pa_14_20', 'pa_21_27', 'pa_28_34', 'pa_35_plus')

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')


def camel_to_snake(name: str) -> str:
    """Convert ``passYards`` style keys to ``pass_yards``."""
    return _CAMEL_BOUNDARY.sub(r'_\1', name).lower()


class ScoringRules(BaseModel):
    """Season-scoped scoring coefficients.

    Every category is required; a rule set with a missing or malformed
    category fails validation instead of falling back to a default.
    """

    # Passing
    pass_yards_per_point: float = Field(..., gt=0)
    pass_td: float
    pass_int: float
    # Rushing
    rush_yards_per_point: float = Field(..., gt=0)
    rush_td: float
    # Receiving
    rec_yards_per_point: float = Field(..., gt=0)
    rec_td: float
    ppr: float
    # Misc offense
    two_pt_conv: float
    fumble_lost: float
    return_td: float
    off_fum_ret_td: float
    # Kicking
    fg_0_19: float
    fg_20_29: float
    fg_30_39: float
    fg_40_49: float
    fg_50_plus: float
    fg_miss: float
    fg_miss_max_distance: int | None = Field(None, ge=0)
    xp_made: float
    xp_miss: float
    # Defense / special teams
    sack: float
    def_int: float
    fum_rec: float
    dst_td: float
    safety: float
    block: float
    xp_returned: float
    # Points allowed tiers
    pa_0: float
    pa_1_6: float
    pa_7_13: float
    pa_14_20: float
    pa_21_27: float
    pa_28_34: float
    pa_35_plus: float

    @model_validator(mode='before')
    @classmethod
    def rename_aliases(cls, data: Any) -> Any:
        """Accept the camelCase names of the original rule table."""
        if isinstance(data, Mapping):
            return {RULE_ALIASES.get(key, key): value for key, value in data.items()}
        return data

    @model_validator(mode='after')
    def validate_points_allowed_tiers(self):
        """Ensure allowing more points never earns a bigger bonus."""
        values = [getattr(self, tier) for tier in POINTS_ALLOWED_TIERS]
        for tier, value, next_tier, next_value in zip(
            POINTS_ALLOWED_TIERS, values, POINTS_ALLOWED_TIERS[1:], values[1:]
        ):
            if next_value > value:
                raise ValueError(
                    f'Points allowed tiers must be non-increasing: {next_tier}={next_value} > {tier}={value}'
                )
        return self

    @classmethod
    def from_mapping(cls, rules: Mapping[str, Any]) -> 'ScoringRules':
        """Build a validated rule set from a flat category -> coefficient mapping."""
        return cls.model_validate(dict(rules))

    def with_overrides(self, **overrides: Any) -> 'ScoringRules':
        """Return a new validated rule set with some coefficients replaced."""
        return self.from_mapping({**self.model_dump(), **overrides})

    class Config:
        extra = 'forbid'
        frozen = True


class PlayerStats(BaseModel):
    """One player's normalized stat line for one game.

    Counts are non-negative; yardage may be negative. Field goals are
    recorded as a list of kick distances in yards. ``points_allowed`` is
    only set for a defense that played.
    """

    # Passing
    pass_yards: int = 0
    pass_td: int = Field(0, ge=0)
    pass_int: int = Field(0, ge=0)
    # Rushing
    rush_yards: int = 0
    rush_td: int = Field(0, ge=0)
    # Receiving
    rec_yards: int = 0
    rec_td: int = Field(0, ge=0)
    receptions: int = Field(0, ge=0)
    # Misc offense
    two_pt_conv: int = Field(0, ge=0)
    fumbles_lost: int = Field(0, ge=0)
    return_td: int = Field(0, ge=0)
    off_fum_ret_td: int = Field(0, ge=0)
    # Kicking
    fg_made: list[int] = Field(default_factory=list)
    fg_missed: list[int] = Field(default_factory=list)
    xp_made: int = Field(0, ge=0)
    xp_missed: int = Field(0, ge=0)
    # Defense / special teams
    sacks: int = Field(0, ge=0)
    interceptions: int = Field(0, ge=0)
    fumbles_recovered: int = Field(0, ge=0)
    defensive_td: int = Field(0, ge=0)
    safeties: int = Field(0, ge=0)
    blocked_kicks: int = Field(0, ge=0)
    xp_returned: int = Field(0, ge=0)
    points_allowed: int | None = Field(None, ge=0)

    @model_validator(mode='before')
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Accept camelCase stat names."""
        if isinstance(data, Mapping):
            return {camel_to_snake(key): value for key, value in data.items()}
        return data

    @field_validator('fg_made', 'fg_missed', mode='before')
    @classmethod
    def parse_distances(cls, v):
        """Accept bare distances or ``{'distance': n}`` kick records."""
        if v is None:
            return []
        return [kick['distance'] if isinstance(kick, Mapping) else kick for kick in v]

    @field_validator('fg_made', 'fg_missed')
    @classmethod
    def validate_distances(cls, v):
        for distance in v:
            if distance < 0:
                raise ValueError(f'Field goal distance must be non-negative, got {distance}')
        return v

    class Config:
        extra = 'forbid'
        frozen = True


class PlayerEntry(BaseModel):
    """Player in the contest player pool."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    position: Position
    team: str | None = Field(None, min_length=2, max_length=3)

    class Config:
        extra = 'forbid'


class SubstitutionEntry(BaseModel):
    """Substitution attached to one roster slot."""

    substitute_player_id: str = Field(..., min_length=1)
    effective_week: int = Field(..., ge=1)
    reason: str | None = None

    class Config:
        extra = 'forbid'


class RosterSlotEntry(BaseModel):
    """One drafted player in one roster slot."""

    slot: RosterSlot
    player_id: str = Field(..., min_length=1)
    substitution: SubstitutionEntry | None = None

    class Config:
        extra = 'forbid'


class OwnerEntry(BaseModel):
    """An owner and their drafted roster."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    roster: list[RosterSlotEntry]

    class Config:
        extra = 'forbid'


class RostersFile(BaseModel):
    """Complete rosters/{year}.json file structure."""

    year: int = Field(..., ge=2020, le=2100)
    players: list[PlayerEntry]
    owners: list[OwnerEntry]

    @field_validator('players')
    @classmethod
    def validate_unique_players(cls, v):
        """Ensure player ids are unique."""
        seen = set()
        for player in v:
            if player.id in seen:
                raise ValueError(f'Duplicate player id: {player.id}')
            seen.add(player.id)
        return v

    class Config:
        extra = 'forbid'


class LeagueConfig(BaseModel):
    """League configuration settings."""

    current_season: int = Field(..., ge=2020, le=2100)
    playoff_weeks: list[int] = Field(default_factory=lambda: list(PLAYOFF_WEEKS))
    week_names: dict[int, str] = Field(default_factory=lambda: dict(WEEK_NAMES))
    scoring_rules: ScoringRules

    @field_validator('playoff_weeks')
    @classmethod
    def validate_playoff_weeks(cls, v):
        """Ensure playoff weeks are positive, unique and ascending."""
        if not v:
            raise ValueError('At least one playoff week is required')
        if any(week < 1 for week in v):
            raise ValueError(f'Playoff weeks must be positive: {v}')
        if list(v) != sorted(set(v)):
            raise ValueError(f'Playoff weeks must be unique and ascending: {v}')
        return v

    class Config:
        extra = 'forbid'


class GameOddsEntry(BaseModel):
    """Moneyline odds for one game."""

    home_team: str = Field(..., min_length=2, max_length=3)
    away_team: str = Field(..., min_length=2, max_length=3)
    home_moneyline: float
    away_moneyline: float

    class Config:
        extra = 'forbid'


class OddsFile(BaseModel):
    """Complete odds/{year}/week_{N}.json file structure."""

    week: int = Field(..., ge=1)
    games: list[GameOddsEntry]

    class Config:
        extra = 'forbid'
