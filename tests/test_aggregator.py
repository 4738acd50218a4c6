"""Tests for combining a slot's weekly scores across a substitution."""

import pytest

from bestball.aggregator import ScoreAggregator, scores_by_week
from bestball.constants import RosterSlot
from bestball.models import PlayerScore, Substitution, WeeklyPoints


def make_substitution(effective_week, slot=RosterSlot.RB1):
    return Substitution(
        slot=slot,
        original_player_id='orig',
        substitute_player_id='sub',
        effective_week=effective_week,
        year=2025,
    )


class TestScoreAggregator:
    """Tests for ScoreAggregator."""

    def test_substitution_mid_playoffs(self):
        """Test original weeks 1-2 plus substitute weeks 3 and 5."""
        aggregator = ScoreAggregator(
            {1: 10, 2: 0, 3: 5, 5: 0},
            substitution=make_substitution(3),
            substitute_scores={3: 8, 5: 12},
        )
        assert aggregator.total_points() == 30.0
        assert [w.points for w in aggregator.weekly_breakdown()] == [10.0, 0.0, 8.0, 12.0]

    @pytest.mark.parametrize('effective_week', [1, 2, 3, 5])
    def test_points_split_at_effective_week(self, effective_week):
        """Test total = original before the effective week + substitute from it on."""
        original = {1: 4.5, 2: 7.25, 3: 3.0, 5: 10.0}
        substitute = {1: 1.0, 2: 2.0, 3: 9.5, 5: 6.0}
        aggregator = ScoreAggregator(
            original, substitution=make_substitution(effective_week), substitute_scores=substitute
        )
        expected = sum(p for w, p in original.items() if w < effective_week) + sum(
            p for w, p in substitute.items() if w >= effective_week
        )
        assert aggregator.total_points() == expected

    def test_no_substitution_passes_through(self):
        aggregator = ScoreAggregator({1: 12.5, 2: 3.0, 3: 0.0, 5: 7.25}, original_player_id='orig')
        assert aggregator.total_points() == 22.75
        assert all(w.player_id == 'orig' for w in aggregator.weekly_breakdown())
        assert aggregator.substitution_summary() is None

    def test_missing_weeks_count_as_zero(self):
        aggregator = ScoreAggregator({2: 9.0})
        assert aggregator.effective_points(1) == 0.0
        assert aggregator.total_points() == 9.0

    def test_missing_substitute_weeks_count_as_zero(self):
        aggregator = ScoreAggregator({1: 5.0, 2: 5.0}, substitution=make_substitution(2), substitute_scores={})
        assert aggregator.total_points() == 5.0

    def test_weeks_outside_contest_ignored(self):
        """Test scores for non-contest weeks (e.g. the week-4 bye) are not counted."""
        aggregator = ScoreAggregator({1: 1.0, 4: 50.0, 5: 2.0})
        assert aggregator.total_points() == 3.0

    def test_custom_weeks(self):
        aggregator = ScoreAggregator({1: 1.0, 2: 2.0, 3: 3.0, 4: 4.0}, weeks=(1, 2, 3, 4))
        assert aggregator.total_points() == 10.0
        assert [w.week for w in aggregator.weekly_breakdown()] == [1, 2, 3, 4]

    def test_weekly_breakdown_names_effective_player(self):
        aggregator = ScoreAggregator(
            {1: 10.0, 2: 4.0},
            substitution=make_substitution(2),
            substitute_scores={2: 6.0, 3: 7.0},
        )
        breakdown = aggregator.weekly_breakdown()
        assert breakdown[0] == WeeklyPoints(week=1, points=10.0, player_id='orig')
        assert breakdown[1] == WeeklyPoints(week=2, points=6.0, player_id='sub')
        assert [w.week for w in breakdown] == [1, 2, 3, 5]

    def test_substitution_summary(self):
        aggregator = ScoreAggregator(
            {1: 10.0, 2: 0.0, 3: 5.0, 5: 0.0},
            substitution=make_substitution(3),
            substitute_scores={1: 99.0, 3: 8.0, 5: 12.0},
        )
        summary = aggregator.substitution_summary()
        assert summary.original_points_before == 10.0
        assert summary.substitute_points_after == 20.0
        assert summary.combined_points == aggregator.total_points()

    def test_accepts_player_score_records(self):
        scores = [
            PlayerScore(player_id='orig', week=1, year=2025, total_points=11.1),
            PlayerScore(player_id='orig', week=3, year=2025, total_points=2.2),
        ]
        assert ScoreAggregator(scores).total_points() == 13.3

    def test_total_rounded(self):
        aggregator = ScoreAggregator({1: 0.1, 2: 0.2})
        assert aggregator.total_points() == 0.3


class TestScoresByWeek:
    """Tests for scores_by_week."""

    def test_none(self):
        assert scores_by_week(None) == {}

    def test_mapping_keys_normalized(self):
        assert scores_by_week({'1': 3}) == {1: 3.0}

    def test_records(self):
        records = [PlayerScore(player_id='p', week=2, year=2025, total_points=4.5)]
        assert scores_by_week(records) == {2: 4.5}
