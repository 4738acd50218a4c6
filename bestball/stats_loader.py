"""Reading normalized per-week stat tables with polars."""

import logging
from pathlib import Path
from typing import Any, Optional

import polars as pl

from .schemas import PlayerStats

logger = logging.getLogger('bestball.stats_loader')

# Columns identifying a row rather than holding a stat
ID_COLUMNS = ('player_id', 'week', 'year', 'name', 'team', 'position')

# Columns holding ';'-separated kick distances
KICK_COLUMNS = ('fg_made', 'fg_missed')


def parse_stat_row(row: dict[str, Any]) -> PlayerStats:
    """
    Convert one stat table row into a validated PlayerStats.

    Empty cells are treated as absent; kick columns hold distances
    separated by ';' (e.g. ``"23;47"``).

    Raises:
        ValidationError: If a value is malformed (e.g. a negative count)
    """
    fields: dict[str, Any] = {}
    for column, value in row.items():
        if column in ID_COLUMNS or value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if value == '':
                continue
        if column in KICK_COLUMNS:
            value = [int(distance) for distance in str(value).split(';') if distance.strip()]
        fields[column] = value
    return PlayerStats.model_validate(fields)


class SeasonStats:
    """Lazily loads and caches a season's normalized stat table.

    The table is a CSV with one row per (player, week): ``player_id``,
    ``week`` and any PlayerStats columns.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._frame: Optional[pl.DataFrame] = None

    @property
    def frame(self) -> pl.DataFrame:
        """Lazy load the stat table."""
        if self._frame is None:
            if not self.path.exists():
                raise FileNotFoundError(f'Stats file not found: {self.path}')
            logger.info(f'Loading stats from {self.path}...')
            frame = pl.read_csv(self.path, infer_schema=False)
            missing = {'player_id', 'week'} - set(frame.columns)
            if missing:
                raise ValueError(f'Stats file {self.path} is missing columns: {", ".join(sorted(missing))}')
            self._frame = frame.with_columns(pl.col('week').str.strip_chars().cast(pl.Int64))
        return self._frame

    def weeks(self) -> list[int]:
        """Weeks that have at least one stat row."""
        return sorted(self.frame.get_column('week').unique().to_list())

    def week_stats(self, week: int) -> dict[str, PlayerStats]:
        """
        All stat lines for one week, keyed by player id.

        A player listed twice keeps the first row.
        """
        rows = self.frame.filter(pl.col('week') == week)
        stats: dict[str, PlayerStats] = {}
        for row in rows.iter_rows(named=True):
            player_id = row['player_id']
            if player_id in stats:
                logger.warning(f'Duplicate stat row for {player_id} in week {week}; keeping the first')
                continue
            stats[player_id] = parse_stat_row(row)
        return stats
