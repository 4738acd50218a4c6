"""Roster entries and substitution management."""

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Sequence

from .aggregator import ScoreAggregator, ScoresLike, scores_by_week
from .constants import FLEX_ELIGIBLE, PLAYOFF_WEEKS, RosterSlot
from .models import Player, Substitution


@dataclass(frozen=True)
class RosterEntry:
    """
    One drafted player in one roster slot, with an optional substitution.

    ``scores`` and ``substitute_scores`` map week -> points.
    """
    slot: RosterSlot
    player: Player
    scores: Mapping[int, float] = field(default_factory=dict)
    substitution: Optional[Substitution] = None
    substitute: Optional[Player] = None
    substitute_scores: Mapping[int, float] = field(default_factory=dict)

    def aggregator(self, weeks: Sequence[int] = PLAYOFF_WEEKS) -> ScoreAggregator:
        return ScoreAggregator(
            self.scores,
            substitution=self.substitution,
            substitute_scores=self.substitute_scores,
            weeks=weeks,
            original_player_id=self.player.id,
        )

    def effective_player(self, week: int) -> Player:
        """The substitute from the effective week onward, else the original player."""
        if self.substitution is not None and self.substitute is not None:
            if week >= self.substitution.effective_week:
                return self.substitute
        return self.player

    def points_for_week(self, week: int) -> float:
        return self.aggregator().effective_points(week)


def is_substitute_compatible(slot: RosterSlot, original: Player, substitute: Player) -> bool:
    """Same position as the original, or any FLEX-eligible position in the FLEX slot."""
    if substitute.position == original.position:
        return True
    return slot == RosterSlot.FLEX and substitute.position in FLEX_ELIGIBLE


def add_substitution(
    entry: RosterEntry,
    substitute: Player,
    effective_week: int,
    year: int,
    substitute_scores: Optional[ScoresLike] = None,
    reason: Optional[str] = None,
) -> RosterEntry:
    """
    Attach a substitution to a roster entry.

    Args:
        entry: Roster entry for the injured player
        substitute: Replacement player
        effective_week: First week the substitute's points count
        year: Contest year
        substitute_scores: Substitute's scores (week -> points or PlayerScore records)
        reason: Optional free-text reason

    Returns:
        New RosterEntry carrying the substitution

    Raises:
        ValueError: If the slot already has a substitution or the positions are incompatible
    """
    if entry.substitution is not None:
        raise ValueError(
            f'A substitution already exists for {entry.slot.value}. Delete it first to create a new one.'
        )
    if not is_substitute_compatible(entry.slot, entry.player, substitute):
        raise ValueError(
            f'Position mismatch: cannot substitute {substitute.position.value} for '
            f'{entry.player.position.value} in {entry.slot.value} slot'
        )
    if effective_week < 1:
        raise ValueError(f'Effective week must be positive, got {effective_week}')

    substitution = Substitution(
        slot=entry.slot,
        original_player_id=entry.player.id,
        substitute_player_id=substitute.id,
        effective_week=effective_week,
        year=year,
        reason=reason,
    )
    return replace(
        entry,
        substitution=substitution,
        substitute=substitute,
        substitute_scores=scores_by_week(substitute_scores),
    )


def remove_substitution(entry: RosterEntry) -> RosterEntry:
    """Drop a substitution, reverting the slot to the original player for all weeks."""
    return replace(entry, substitution=None, substitute=None, substitute_scores={})
