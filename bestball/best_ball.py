"""Best-ball lineup optimization.

Each week the highest-scoring valid lineup is picked retroactively from the
roster. Every non-FLEX slot draws from a single position, so filling those
slots greedily with the best unused player and then giving FLEX to the best
leftover RB/WR/TE maximizes the lineup total.
"""

from typing import Sequence

from .constants import FLEX_ELIGIBLE, PLAYOFF_WEEKS, REQUIRED_STARTERS, Position, RosterSlot
from .models import BestBallLineup, BestBallTotals, LineupSlot, WeeklyPoints
from .roster import RosterEntry
from .scoring import round_points


def slot_accepts(slot: RosterSlot, position: Position) -> bool:
    """Whether a player at ``position`` may start in ``slot``."""
    if slot == RosterSlot.FLEX:
        return position in FLEX_ELIGIBLE
    return REQUIRED_STARTERS[slot] == position


def optimal_lineup(roster: Sequence[RosterEntry], week: int) -> BestBallLineup:
    """
    Calculate the optimal best-ball lineup for a week.

    Slots that cannot be filled (too few players at a position) are left
    out of the starters. Exact ties keep roster order. A player starts at
    most once, even when the roster lists them twice through a substitution.

    Args:
        roster: Roster entries (normally 9, one per slot)
        week: Week number

    Returns:
        BestBallLineup with starters in slot order, bench, and starter total
    """
    candidates = [
        LineupSlot(
            slot=entry.slot,
            player=entry.effective_player(week),
            points=entry.points_for_week(week),
            roster_slot=entry.slot,
        )
        for entry in roster
    ]

    # Roster indexes grouped by position, best first
    by_position: dict[Position, list[int]] = {}
    for index, candidate in enumerate(candidates):
        by_position.setdefault(candidate.player.position, []).append(index)
    for indexes in by_position.values():
        indexes.sort(key=lambda i: candidates[i].points, reverse=True)

    # A substitute can also be drafted elsewhere on the roster; start them once
    used: set[str] = set()
    picks: dict[RosterSlot, int] = {}

    def pick(slot: RosterSlot, indexes: list[int]) -> None:
        for i in indexes:
            if candidates[i].player.id not in used:
                picks[slot] = i
                used.add(candidates[i].player.id)
                return

    for slot, position in REQUIRED_STARTERS.items():
        pick(slot, by_position.get(position, []))

    flex_candidates = [i for position in FLEX_ELIGIBLE for i in by_position.get(position, [])]
    flex_candidates.sort(key=lambda i: candidates[i].points, reverse=True)
    pick(RosterSlot.FLEX, flex_candidates)

    starters = tuple(
        LineupSlot(
            slot=slot,
            player=candidates[picks[slot]].player,
            points=candidates[picks[slot]].points,
            roster_slot=candidates[picks[slot]].roster_slot,
        )
        for slot in RosterSlot
        if slot in picks
    )
    benched: set[str] = set()
    bench = []
    for candidate in candidates:
        if candidate.player.id in used or candidate.player.id in benched:
            continue
        benched.add(candidate.player.id)
        bench.append(candidate)

    return BestBallLineup(
        week=week,
        starters=starters,
        bench=tuple(bench),
        total_points=round_points(sum(starter.points for starter in starters)),
    )


def best_ball_totals(
    roster: Sequence[RosterEntry], weeks: Sequence[int] = PLAYOFF_WEEKS
) -> BestBallTotals:
    """Optimal lineup totals for each contest week and overall."""
    weekly_totals = tuple(
        WeeklyPoints(week=week, points=optimal_lineup(roster, week).total_points) for week in weeks
    )
    return BestBallTotals(
        weekly_totals=weekly_totals,
        total=round_points(sum(w.points for w in weekly_totals)),
    )


def total_best_ball_points(roster: Sequence[RosterEntry], weeks: Sequence[int] = PLAYOFF_WEEKS) -> float:
    return best_ball_totals(roster, weeks).total
