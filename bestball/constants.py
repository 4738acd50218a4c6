"""Constants and mappings for the playoff best ball scorer."""

from enum import Enum


class Position(str, Enum):
    """NFL fantasy positions."""

    QB = 'QB'
    RB = 'RB'
    WR = 'WR'
    TE = 'TE'
    K = 'K'
    DST = 'DST'


class RosterSlot(str, Enum):
    """Roster slots, in canonical lineup order."""

    QB = 'QB'
    RB1 = 'RB1'
    RB2 = 'RB2'
    WR1 = 'WR1'
    WR2 = 'WR2'
    TE = 'TE'
    FLEX = 'FLEX'
    K = 'K'
    DST = 'DST'


# Positions eligible for the FLEX slot (order is the FLEX tie-break order)
FLEX_ELIGIBLE = (Position.RB, Position.WR, Position.TE)

# Non-FLEX slot -> required position
REQUIRED_STARTERS = {
    RosterSlot.QB: Position.QB,
    RosterSlot.RB1: Position.RB,
    RosterSlot.RB2: Position.RB,
    RosterSlot.WR1: Position.WR,
    RosterSlot.WR2: Position.WR,
    RosterSlot.TE: Position.TE,
    RosterSlot.K: Position.K,
    RosterSlot.DST: Position.DST,
}

# Playoff scoring weeks (no week 4 = Pro Bowl)
PLAYOFF_WEEKS = (1, 2, 3, 5)

WEEK_NAMES = {
    1: 'Wild Card',
    2: 'Divisional',
    3: 'Conference Championship',
    5: 'Super Bowl',
}

# Baseline points per game when a player has no playoff games yet
POSITION_AVERAGES = {
    Position.QB: 18.5,
    Position.RB: 12.0,
    Position.WR: 11.5,
    Position.TE: 8.0,
    Position.K: 7.5,
    Position.DST: 7.0,
}

# Minimum games played for a "high" confidence projection
HIGH_CONFIDENCE_GAMES = 2

# Average value of a made field goal when projecting kickers
AVERAGE_FG_POINTS = 3.5
