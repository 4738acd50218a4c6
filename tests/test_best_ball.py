"""Tests for best-ball lineup optimization."""

import dataclasses
import random

import pytest

from bestball.best_ball import best_ball_totals, optimal_lineup, slot_accepts, total_best_ball_points
from bestball.constants import REQUIRED_STARTERS, Position, RosterSlot
from bestball.models import Player
from bestball.roster import RosterEntry, add_substitution


def make_entry(player_id, position, points, slot=None, week=1):
    """Roster entry scoring ``points`` in ``week`` (or a week -> points dict)."""
    position = Position(position)
    if slot is None:
        slot = RosterSlot.FLEX if position in (Position.RB, Position.WR, Position.TE) else RosterSlot(position.value)
    scores = points if isinstance(points, dict) else {week: points}
    return RosterEntry(
        slot=slot,
        player=Player(id=player_id, name=player_id.upper(), position=position),
        scores=scores,
    )


def standard_roster():
    return [
        make_entry('qb', 'QB', 20.0, RosterSlot.QB),
        make_entry('rb1', 'RB', 9.0, RosterSlot.RB1),
        make_entry('rb2', 'RB', 7.0, RosterSlot.RB2),
        make_entry('wr1', 'WR', 11.0, RosterSlot.WR1),
        make_entry('wr2', 'WR', 3.0, RosterSlot.WR2),
        make_entry('te', 'TE', 4.0, RosterSlot.TE),
        make_entry('flex', 'RB', 15.0, RosterSlot.FLEX),
        make_entry('k', 'K', 8.0, RosterSlot.K),
        make_entry('dst', 'DST', 5.0, RosterSlot.DST),
    ]


def brute_force_total(candidates):
    """Best total over every assignment that fills as many slots as possible."""
    slots = list(RosterSlot)
    best = (-1, float('-inf'))

    def search(index, used, filled, total):
        nonlocal best
        if index == len(slots):
            best = max(best, (filled, total))
            return
        slot = slots[index]
        eligible = [i for i, (position, _) in enumerate(candidates) if i not in used and slot_accepts(slot, position)]
        for i in eligible:
            search(index + 1, used | {i}, filled + 1, total + candidates[i][1])
        search(index + 1, used, filled, total)

    search(0, frozenset(), 0, 0.0)
    return best[1]


def starters_by_slot(lineup):
    return {starter.slot: starter for starter in lineup.starters}


class TestOptimalLineup:
    """Tests for optimal_lineup."""

    def test_full_roster(self):
        lineup = optimal_lineup(standard_roster(), week=1)
        starters = starters_by_slot(lineup)
        assert [s.slot for s in lineup.starters] == list(RosterSlot)
        assert starters[RosterSlot.RB1].player.id == 'flex'
        assert starters[RosterSlot.RB2].player.id == 'rb1'
        assert starters[RosterSlot.FLEX].player.id == 'rb2'
        assert starters[RosterSlot.FLEX].roster_slot == RosterSlot.RB2
        assert lineup.total_points == 82.0
        assert lineup.bench == ()

    def test_extra_players_benched(self):
        roster = standard_roster() + [
            make_entry('wr3', 'WR', 12.0),
            make_entry('qb2', 'QB', 25.0),
        ]
        lineup = optimal_lineup(roster, week=1)
        starters = starters_by_slot(lineup)
        assert starters[RosterSlot.QB].player.id == 'qb2'
        assert starters[RosterSlot.WR1].player.id == 'wr3'
        assert starters[RosterSlot.WR2].player.id == 'wr1'
        assert starters[RosterSlot.FLEX].player.id == 'rb2'
        assert {b.player.id for b in lineup.bench} == {'qb', 'wr2'}
        assert lineup.total_points == 96.0

    def test_missing_wr_leaves_slot_empty(self):
        """Test a lone WR leaves WR2 empty and FLEX takes the leftover TE."""
        roster = [
            make_entry('qb', 'QB', 20.0),
            make_entry('rb1', 'RB', 9.0),
            make_entry('rb2', 'RB', 7.0),
            make_entry('wr1', 'WR', 11.0),
            make_entry('te1', 'TE', 6.0),
            make_entry('te2', 'TE', 4.0),
            make_entry('k', 'K', 8.0),
            make_entry('dst', 'DST', 5.0),
        ]
        lineup = optimal_lineup(roster, week=1)
        starters = starters_by_slot(lineup)
        assert RosterSlot.WR2 not in starters
        assert starters[RosterSlot.TE].player.id == 'te1'
        assert starters[RosterSlot.FLEX].player.id == 'te2'
        assert lineup.total_points == 70.0

    def test_empty_roster(self):
        lineup = optimal_lineup([], week=1)
        assert lineup.starters == ()
        assert lineup.bench == ()
        assert lineup.total_points == 0.0

    def test_no_player_starts_twice(self):
        lineup = optimal_lineup(standard_roster(), week=1)
        ids = [s.player.id for s in lineup.starters]
        assert len(ids) == len(set(ids))

    def test_starters_eligible(self):
        roster = standard_roster() + [make_entry('te2', 'TE', 30.0)]
        lineup = optimal_lineup(roster, week=1)
        for starter in lineup.starters:
            assert slot_accepts(starter.slot, starter.player.position)

    def test_ties_keep_roster_order(self):
        roster = [
            make_entry('wr_a', 'WR', 10.0),
            make_entry('wr_b', 'WR', 10.0),
            make_entry('wr_c', 'WR', 10.0),
        ]
        lineup = optimal_lineup(roster, week=1)
        starters = starters_by_slot(lineup)
        assert starters[RosterSlot.WR1].player.id == 'wr_a'
        assert starters[RosterSlot.WR2].player.id == 'wr_b'
        assert starters[RosterSlot.FLEX].player.id == 'wr_c'

    def test_negative_points_still_start(self):
        """Test a lone kicker with a negative week still fills K."""
        lineup = optimal_lineup([make_entry('k', 'K', -2.0)], week=1)
        assert lineup.total_points == -2.0

    def test_week_without_scores(self):
        lineup = optimal_lineup(standard_roster(), week=5)
        assert lineup.total_points == 0.0
        assert len(lineup.starters) == 9

    def test_substitute_used_from_effective_week(self):
        roster = standard_roster()
        substitute = Player(id='rb_sub', name='RB SUB', position=Position.RB)
        roster[1] = add_substitution(roster[1], substitute, effective_week=2, year=2025, substitute_scores={2: 30.0})
        assert starters_by_slot(optimal_lineup(roster, 1))[RosterSlot.RB2].player.id == 'rb1'
        week_two = optimal_lineup(roster, 2)
        assert starters_by_slot(week_two)[RosterSlot.RB1].player.id == 'rb_sub'
        assert week_two.total_points == 30.0

    def test_substitute_already_drafted_starts_once(self):
        """Test a substitute who is also drafted in another slot is not counted twice."""
        roster = standard_roster()
        star = Player(id='wr_star', name='WR STAR', position=Position.WR)
        roster[3] = RosterEntry(slot=RosterSlot.WR1, player=star, scores={2: 30.0})
        roster[4] = add_substitution(
            make_entry('wr_hurt', 'WR', {1: 5.0}, RosterSlot.WR2),
            star,
            effective_week=2,
            year=2025,
            substitute_scores={2: 30.0},
        )
        lineup = optimal_lineup(roster, week=2)
        starters = starters_by_slot(lineup)
        ids = [s.player.id for s in lineup.starters]
        assert len(ids) == len(set(ids))
        assert starters[RosterSlot.WR1].player.id == 'wr_star'
        assert RosterSlot.WR2 not in starters
        assert 'wr_star' not in {b.player.id for b in lineup.bench}
        assert lineup.total_points == 30.0

    def test_flex_substitute_changes_position(self):
        """Test a TE substituted into a WR's FLEX slot is placed as a TE."""
        roster = standard_roster()
        roster[6] = make_entry('flex_wr', 'WR', {1: 2.0}, RosterSlot.FLEX)
        substitute = Player(id='te_sub', name='TE SUB', position=Position.TE)
        roster[6] = add_substitution(roster[6], substitute, effective_week=2, year=2025, substitute_scores={2: 9.0})
        starters = starters_by_slot(optimal_lineup(roster, 2))
        assert starters[RosterSlot.TE].player.id == 'te_sub'
        assert starters[RosterSlot.TE].roster_slot == RosterSlot.FLEX

    def test_result_immutable(self):
        lineup = optimal_lineup(standard_roster(), week=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            lineup.total_points = 0.0

    def test_repeatable(self):
        roster = standard_roster()
        assert optimal_lineup(roster, 1) == optimal_lineup(roster, 1)

    @pytest.mark.parametrize('seed', range(30))
    def test_matches_exhaustive_search(self, seed):
        """Test the greedy lineup equals the best of all assignments."""
        rng = random.Random(seed)
        positions = [Position.QB, Position.K, Position.DST] + [
            rng.choice([Position.QB, Position.RB, Position.WR, Position.TE, Position.K, Position.DST])
            for _ in range(rng.randint(4, 9))
        ]
        roster = [
            make_entry(f'p{i}', position, rng.randint(-8, 60) / 2)
            for i, position in enumerate(positions)
        ]
        lineup = optimal_lineup(roster, week=1)
        candidates = [(entry.player.position, entry.scores[1]) for entry in roster]
        assert lineup.total_points == pytest.approx(brute_force_total(candidates))


class TestSlotAccepts:
    """Tests for slot eligibility."""

    def test_required_slots(self):
        for slot, position in REQUIRED_STARTERS.items():
            for other in Position:
                assert slot_accepts(slot, other) == (other == position)

    def test_flex(self):
        assert slot_accepts(RosterSlot.FLEX, Position.RB)
        assert slot_accepts(RosterSlot.FLEX, Position.WR)
        assert slot_accepts(RosterSlot.FLEX, Position.TE)
        assert not slot_accepts(RosterSlot.FLEX, Position.QB)
        assert not slot_accepts(RosterSlot.FLEX, Position.K)


class TestBestBallTotals:
    """Tests for totals across contest weeks."""

    def test_weekly_and_total(self):
        roster = [
            make_entry('qb', 'QB', {1: 20.0, 2: 10.0, 5: 4.0}),
            make_entry('qb2', 'QB', {1: 5.0, 2: 15.0, 3: 1.0}),
            make_entry('k', 'K', {3: 7.0}),
        ]
        totals = best_ball_totals(roster)
        assert [(w.week, w.points) for w in totals.weekly_totals] == [(1, 20.0), (2, 15.0), (3, 8.0), (5, 4.0)]
        assert totals.total == 47.0
        assert total_best_ball_points(roster) == 47.0

    def test_custom_weeks(self):
        roster = [make_entry('qb', 'QB', {1: 20.0, 4: 6.0})]
        assert total_best_ball_points(roster, weeks=(1, 2, 3, 4)) == 26.0
        assert total_best_ball_points(roster) == 20.0

    def test_best_ball_at_least_fixed_lineup(self):
        """Test the optimal total is never below starting everyone in their drafted slot."""
        roster = standard_roster() + [make_entry('wr3', 'WR', {1: 1.0, 2: 40.0})]
        fixed = sum(entry.points_for_week(week) for entry in roster[:9] for week in (1, 2, 3, 5))
        assert total_best_ball_points(roster) >= fixed
