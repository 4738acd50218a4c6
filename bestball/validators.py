"""Validation functions for rosters, substitutions, and scoring results."""

from typing import Iterable, Sequence

from .best_ball import slot_accepts
from .constants import RosterSlot
from .models import PlayerScore
from .roster import RosterEntry, is_substitute_compatible


def validate_substitution(entry: RosterEntry) -> list[str]:
    """
    Check a roster entry's substitution against league rules.

    Checks:
    - Substitute position matches the original (or FLEX takes any RB/WR/TE)
    - Substitution refers to the entry's player and slot
    - Effective week is positive

    Returns:
        List of validation error messages (empty if valid or no substitution)
    """
    errors = []
    sub = entry.substitution
    if sub is None:
        return errors

    slot = entry.slot.value
    if entry.substitute is None:
        errors.append(f'{slot} substitution has no substitute player')
    else:
        if entry.substitute.id != sub.substitute_player_id:
            errors.append(
                f'{slot} substitute {entry.substitute.id} does not match substitution ({sub.substitute_player_id})'
            )
        if not is_substitute_compatible(entry.slot, entry.player, entry.substitute):
            errors.append(
                f'{slot} substitute {entry.substitute.name} ({entry.substitute.position.value}) '
                f'cannot replace {entry.player.name} ({entry.player.position.value})'
            )
    if sub.original_player_id != entry.player.id:
        errors.append(f'{slot} substitution replaces {sub.original_player_id}, not {entry.player.id}')
    if sub.slot != entry.slot:
        errors.append(f'{slot} substitution is recorded for slot {sub.slot.value}')
    if sub.effective_week < 1:
        errors.append(f'{slot} substitution has invalid effective week {sub.effective_week}')

    return errors


def validate_roster(owner: str, roster: Sequence[RosterEntry]) -> list[str]:
    """
    Validate that an owner's roster complies with league rules.

    Checks:
    - Exactly one player per slot, all 9 slots filled
    - Each drafted player is eligible for their slot
    - No player drafted twice
    - No substitute who is already drafted
    - Substitutions are valid

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    slots = [entry.slot for entry in roster]
    for slot in RosterSlot:
        count = slots.count(slot)
        if count == 0:
            errors.append(f'{owner} has no player in {slot.value}')
        elif count > 1:
            errors.append(f'{owner} has {count} players in {slot.value}')

    for entry in roster:
        if not slot_accepts(entry.slot, entry.player.position):
            errors.append(
                f'{owner} has {entry.player.name} ({entry.player.position.value}) in {entry.slot.value}'
            )

    seen = set()
    duplicates = set()
    for entry in roster:
        if entry.player.id in seen:
            duplicates.add(entry.player.name)
        seen.add(entry.player.id)
    if duplicates:
        errors.append(f'{owner} has duplicate players: {", ".join(sorted(duplicates))}')

    for entry in roster:
        if entry.substitute is not None and entry.substitute.id in seen:
            errors.append(
                f'{owner}: {entry.slot.value} substitute {entry.substitute.name} is already on the roster'
            )

    for entry in roster:
        errors.extend(f'{owner}: {error}' for error in validate_substitution(entry))

    return errors


def validate_player_score(score: PlayerScore) -> list[str]:
    """
    Check that a player's score is reasonable and internally consistent.

    Sanity checks:
    - Total points in reasonable range (-20 to 100)
    - Breakdown totals match final score (within rounding)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    label = f'{score.player_id} week {score.week}'

    if score.total_points > 100:
        warnings.append(f'{label} scored {score.total_points:.2f} pts (unusually high - check for scoring bug)')
    elif score.total_points < -20:
        warnings.append(f'{label} scored {score.total_points:.2f} pts (unusually low - check for scoring bug)')

    if score.breakdown:
        breakdown_sum = sum(score.breakdown.values())
        # Each category is rounded separately
        tolerance = 0.005 * len(score.breakdown) + 0.005
        diff = abs(breakdown_sum - score.total_points)
        if diff > tolerance:
            warnings.append(
                f'{label} breakdown sum ({breakdown_sum:.2f}) != total ({score.total_points:.2f}) - difference: {diff:.2f}'
            )

    return warnings


def validate_all_scores(scores: Iterable[PlayerScore]) -> list[str]:
    """Validate every player score; returns all warnings."""
    warnings: list[str] = []
    for score in scores:
        warnings.extend(validate_player_score(score))
    return warnings
