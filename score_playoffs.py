#!/usr/bin/env python3
"""
Playoff Best Ball Scorer CLI

Scores every rostered player's playoff games from a normalized stat table
and prints the best-ball leaderboard.

Inputs (under --data-dir):
    league_config.json          season, playoff weeks, scoring rules
    rosters/{year}.json         player pool, owners, rosters, substitutions
    stats/{year}.csv            one row per (player_id, week)
    odds/{year}/week_{N}.json   optional moneylines for the next week

Usage:
    python score_playoffs.py --year 2025
    python score_playoffs.py --year 2025 --output web/standings.json
"""

import argparse
import logging
import sys
from pathlib import Path

from bestball.config import load_config
from bestball.logging_config import get_logger, setup_logging
from bestball.standings import (
    build_players,
    build_standings,
    load_rosters,
    load_week_odds,
    score_season,
)
from bestball.projections import remaining_weeks
from bestball.stats_loader import SeasonStats
from bestball.utils import save_json


def main():
    parser = argparse.ArgumentParser(description="Playoff best ball scorer")
    parser.add_argument(
        "--year", "-y",
        type=int,
        default=None,
        help="Contest year (defaults to current_season from the league config)",
    )
    parser.add_argument(
        "--data-dir", "-d",
        default="data",
        help="Path to data directory",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write standings JSON to this path",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write a log file to this directory",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors",
    )

    args = parser.parse_args()

    setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=logging.WARNING if args.quiet else logging.INFO,
        log_to_file=args.log_dir is not None,
    )
    logger = get_logger('bestball.cli')

    data_dir = Path(args.data_dir)
    config = load_config(data_dir / "league_config.json")
    year = args.year or config.current_season
    weeks = config.playoff_weeks

    rosters_path = data_dir / "rosters" / f"{year}.json"
    stats_path = data_dir / "stats" / f"{year}.csv"

    if not rosters_path.exists():
        logger.error(f"Rosters file not found: {rosters_path}")
        sys.exit(1)

    rosters = load_rosters(rosters_path)
    players = build_players(rosters)

    if stats_path.exists():
        stats = SeasonStats(stats_path)
        player_scores = score_season(stats, players, year, config.scoring_rules, weeks)
        completed = [week for week in weeks if week in set(stats.weeks())]
    else:
        logger.warning(f"Stats file not found: {stats_path}; every player has 0 points")
        player_scores = {}
        completed = []

    upcoming = remaining_weeks(completed, weeks)
    next_week_name = config.week_names.get(upcoming[0], f"Week {upcoming[0]}") if upcoming else None
    odds = []
    if upcoming:
        odds = load_week_odds(data_dir / "odds" / str(year) / f"week_{upcoming[0]}.json")

    standings = build_standings(rosters, player_scores, weeks, completed, odds)

    print("\n" + "=" * 60)
    print(f"BEST BALL STANDINGS {year}")
    print("=" * 60)
    for standing in standings:
        weekly = "  ".join(
            f"W{w.week}: {w.points:.2f}" for w in standing.weekly_best_ball
        )
        print(f"  {standing.rank}. {standing.owner_name}: {standing.best_ball_points:.2f} pts")
        print(f"       {weekly}")
        print(f"       roster total {standing.total_points:.2f}", end="")
        if upcoming:
            print(
                f" | {next_week_name} projection {standing.projected_points:.2f}"
                f" (EV {standing.expected_value:.2f})",
            )
        else:
            print()

    if args.output:
        save_json(args.output, {"year": year, "weeks": weeks, "standings": standings})
        print(f"\nStandings saved: {args.output}")


if __name__ == "__main__":
    main()
