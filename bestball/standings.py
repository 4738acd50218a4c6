"""Contest standings built from roster, stat and odds files.

This is the caller layer around the pure scoring core: it loads files,
scores every rostered player's games, and assembles per-owner best-ball
totals, raw totals and next-week projections.
"""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from .aggregator import scores_by_week
from .best_ball import best_ball_totals
from .constants import PLAYOFF_WEEKS
from .models import OwnerStanding, Player, PlayerScore
from .odds import GameOdds, team_win_probability
from .projections import expected_value, project, remaining_weeks
from .roster import RosterEntry, add_substitution
from .rules import DEFAULT_SCORING_RULES
from .schemas import OddsFile, OwnerEntry, RostersFile, ScoringRules
from .scoring import round_points, score_player
from .stats_loader import SeasonStats
from .utils import load_json
from .validators import validate_all_scores, validate_roster

logger = logging.getLogger('bestball.standings')


def load_rosters(path: Path | str) -> RostersFile:
    """Load and validate a rosters/{year}.json file."""
    return load_json(path, schema=RostersFile)


def load_week_odds(path: Path | str) -> list[GameOdds]:
    """Load a week's moneylines; a missing file means no odds are posted yet."""
    path = Path(path)
    if not path.exists():
        logger.info(f'No odds file at {path}; expected values will be skipped')
        return []
    odds_file = load_json(path, schema=OddsFile)
    return [
        GameOdds(
            home_team=game.home_team,
            away_team=game.away_team,
            home_moneyline=game.home_moneyline,
            away_moneyline=game.away_moneyline,
        )
        for game in odds_file.games
    ]


def build_players(rosters: RostersFile) -> dict[str, Player]:
    return {
        p.id: Player(id=p.id, name=p.name, position=p.position, team=p.team)
        for p in rosters.players
    }


def score_season(
    stats: SeasonStats,
    players: Mapping[str, Player],
    year: int,
    rules: ScoringRules = DEFAULT_SCORING_RULES,
    weeks: Sequence[int] = PLAYOFF_WEEKS,
) -> dict[str, list[PlayerScore]]:
    """
    Score every known player's games in the contest weeks.

    Stat rows for players outside the player pool are skipped.

    Returns:
        Dict mapping player id to that player's PlayerScore records
    """
    scores: dict[str, list[PlayerScore]] = defaultdict(list)
    available = set(stats.weeks())

    for week in weeks:
        if week not in available:
            logger.info(f'No stats for week {week} yet')
            continue
        scored = skipped = 0
        for player_id, line in stats.week_stats(week).items():
            player = players.get(player_id)
            if player is None:
                skipped += 1
                continue
            scores[player_id].append(score_player(player_id, week, year, line, player.position, rules))
            scored += 1
        logger.info(f'Scored week {week}: {scored} players, {skipped} unrostered rows skipped')

    for warning in validate_all_scores(s for player_scores in scores.values() for s in player_scores):
        logger.warning(warning)

    return dict(scores)


def build_roster(
    owner: OwnerEntry,
    players: Mapping[str, Player],
    player_scores: Mapping[str, Iterable[PlayerScore]],
    year: int,
) -> list[RosterEntry]:
    """
    Build an owner's roster entries, attaching weekly points and substitutions.

    Raises:
        ValueError: If the roster names an unknown player or an invalid substitution
    """
    roster = []
    for slot_entry in owner.roster:
        player = players.get(slot_entry.player_id)
        if player is None:
            raise ValueError(f'{owner.name} rosters unknown player {slot_entry.player_id}')

        entry = RosterEntry(
            slot=slot_entry.slot,
            player=player,
            scores=scores_by_week(player_scores.get(player.id, [])),
        )

        sub = slot_entry.substitution
        if sub is not None:
            substitute = players.get(sub.substitute_player_id)
            if substitute is None:
                raise ValueError(f'{owner.name} substitutes unknown player {sub.substitute_player_id}')
            entry = add_substitution(
                entry,
                substitute,
                effective_week=sub.effective_week,
                year=year,
                substitute_scores=player_scores.get(substitute.id, []),
                reason=sub.reason,
            )
        roster.append(entry)
    return roster


def build_standings(
    rosters: RostersFile,
    player_scores: Mapping[str, Iterable[PlayerScore]],
    weeks: Sequence[int] = PLAYOFF_WEEKS,
    completed_weeks: Optional[Iterable[int]] = None,
    odds: Sequence[GameOdds] = (),
) -> list[OwnerStanding]:
    """
    Rank owners by best-ball points.

    Args:
        rosters: Validated rosters file
        player_scores: Player id -> PlayerScore records
        weeks: Contest weeks
        completed_weeks: Weeks already played (default: weeks with any score)
        odds: Moneylines for the next week, used for expected value

    Returns:
        OwnerStanding rows sorted by best-ball points, ranked from 1
    """
    players = build_players(rosters)
    player_scores = {player_id: list(scores) for player_id, scores in player_scores.items()}

    if completed_weeks is None:
        completed_weeks = {s.week for scores in player_scores.values() for s in scores}
    completed = sorted(set(completed_weeks) & set(weeks))
    upcoming = remaining_weeks(completed, weeks)
    next_week = upcoming[0] if upcoming else None

    standings = []
    for owner in rosters.owners:
        roster = build_roster(owner, players, player_scores, rosters.year)
        for error in validate_roster(owner.name, roster):
            logger.warning(error)

        standing = OwnerStanding(owner_id=owner.id, owner_name=owner.name)
        standing.total_points = round_points(sum(entry.aggregator(weeks).total_points() for entry in roster))

        totals = best_ball_totals(roster, weeks)
        standing.best_ball_points = totals.total
        standing.weekly_best_ball = list(totals.weekly_totals)

        if next_week is not None:
            projected = 0.0
            expected = 0.0
            for entry in roster:
                player = entry.effective_player(next_week)
                own_scores = scores_by_week(player_scores.get(player.id, []))
                past = [(week, own_scores[week]) for week in completed if week in own_scores]
                projection = project(player.position, past)
                projected += projection.projected_points
                ev = expected_value(projection.projected_points, team_win_probability(odds, player.team))
                if ev is not None:
                    expected += ev
            standing.projected_points = round_points(projected)
            standing.expected_value = round_points(expected)

        logger.debug(
            f'{owner.name}: best ball {standing.best_ball_points:.2f}, total {standing.total_points:.2f}'
        )
        standings.append(standing)

    standings.sort(key=lambda s: s.best_ball_points, reverse=True)
    for rank, standing in enumerate(standings, 1):
        standing.rank = rank
    return standings
