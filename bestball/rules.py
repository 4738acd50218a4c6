"""Default scoring rules and rule-table lookups."""

from .schemas import ScoringRules

# Half PPR league
DEFAULT_SCORING_RULES = ScoringRules(
    # Passing
    pass_yards_per_point=30,
    pass_td=6,
    pass_int=-2,
    # Rushing
    rush_yards_per_point=10,
    rush_td=6,
    # Receiving
    rec_yards_per_point=10,
    rec_td=6,
    ppr=0.5,
    # Misc offense
    two_pt_conv=2,
    fumble_lost=-2,
    return_td=6,
    off_fum_ret_td=6,
    # Kicking
    fg_0_19=3,
    fg_20_29=3,
    fg_30_39=3,
    fg_40_49=4,
    fg_50_plus=5,
    fg_miss=-1,
    xp_made=1,
    xp_miss=-1,
    # Defense / special teams
    sack=1,
    def_int=2,
    fum_rec=2,
    dst_td=6,
    safety=4,
    block=2,
    xp_returned=2,
    # Points allowed
    pa_0=10,
    pa_1_6=7,
    pa_7_13=4,
    pa_14_20=1,
    pa_21_27=0,
    pa_28_34=-1,
    pa_35_plus=-3,
)


def field_goal_points(distance: int, made: bool, rules: ScoringRules = DEFAULT_SCORING_RULES) -> float:
    """
    Get field goal points based on kick distance.

    Made kicks are bucketed 0-19, 20-29, 30-39, 40-49 and 50+ yards.
    Misses cost ``fg_miss`` at any distance, unless ``fg_miss_max_distance``
    limits the penalty to shorter kicks.
    """
    if made:
        if distance < 20:
            return rules.fg_0_19
        if distance < 30:
            return rules.fg_20_29
        if distance < 40:
            return rules.fg_30_39
        if distance < 50:
            return rules.fg_40_49
        return rules.fg_50_plus

    if rules.fg_miss_max_distance is not None and distance > rules.fg_miss_max_distance:
        return 0.0
    return rules.fg_miss


def points_allowed_score(points_allowed: int, rules: ScoringRules = DEFAULT_SCORING_RULES) -> float:
    """Get the defensive points-allowed tier bonus."""
    if points_allowed == 0:
        return rules.pa_0  # Shutout
    if points_allowed <= 6:
        return rules.pa_1_6
    if points_allowed <= 13:
        return rules.pa_7_13
    if points_allowed <= 20:
        return rules.pa_14_20
    if points_allowed <= 27:
        return rules.pa_21_27
    if points_allowed <= 34:
        return rules.pa_28_34
    return rules.pa_35_plus
