"""Win probabilities from betting odds."""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


def moneyline_to_probability(odds: float) -> float:
    """
    Convert American odds to implied probability.

    Negative odds (favorite): |odds| / (|odds| + 100)
    Positive odds (underdog): 100 / (odds + 100)
    """
    if odds < 0:
        return abs(odds) / (abs(odds) + 100)
    return 100 / (odds + 100)


def remove_vig(home_probability: float, away_probability: float) -> Tuple[float, float]:
    """Normalize implied probabilities so they sum to 1 (strips the bookmaker margin)."""
    total = home_probability + away_probability
    if total <= 0:
        raise ValueError(f'Implied probabilities must be positive, got {home_probability} and {away_probability}')
    return home_probability / total, away_probability / total


@dataclass(frozen=True)
class GameOdds:
    """Moneyline odds for one game."""
    home_team: str
    away_team: str
    home_moneyline: float
    away_moneyline: float

    @property
    def win_probabilities(self) -> Tuple[float, float]:
        """(home, away) win probabilities with the vig removed."""
        return remove_vig(
            moneyline_to_probability(self.home_moneyline),
            moneyline_to_probability(self.away_moneyline),
        )


def team_win_probability(odds: Iterable[GameOdds], team: Optional[str]) -> Optional[float]:
    """Win probability for a team, or None if it has no game on the board."""
    if not team:
        return None
    team = team.upper()
    for game in odds:
        home, away = game.win_probabilities
        if game.home_team.upper() == team:
            return home
        if game.away_team.upper() == team:
            return away
    return None
