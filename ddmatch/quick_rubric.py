"""The simpler 100-point rubric from the first version of the matches route.

Kept as an alternate presentation next to the 8-factor score in
``ddmatch.matching``; it returns a fraction in [0, 1] rather than 0-100.
"""

from __future__ import annotations

from ddmatch.models import Member

MAX_POINTS = 100

NEAR_STAGES = {frozenset({"college", "gap_year"})}
NEAR_FAITH_SEASONS = {frozenset({"exploring", "recently_committed"})}
NEAR_ACCOUNTABILITY = {frozenset({"light", "weekly"})}
COMPLEMENTARY_PREFERENCES = {frozenset({"mentor", "mentee"})}


def _pair_points(x: str, y: str, full: int, near: int, near_pairs: set) -> int:
    if x == y:
        return full
    if frozenset({x, y}) in near_pairs:
        return near
    return 0


def _preference_points(x: str, y: str) -> int:
    if x == y or "no_preference" in (x, y) or frozenset({x, y}) in COMPLEMENTARY_PREFERENCES:
        return 20
    return 0


def quick_match_score(a: Member, b: Member) -> float:
    points = 0
    points += _pair_points(a.stage, b.stage, 20, 10, NEAR_STAGES)
    points += _pair_points(a.faith_season, b.faith_season, 15, 8, NEAR_FAITH_SEASONS)
    points += _pair_points(a.accountability_level, b.accountability_level, 15, 8, NEAR_ACCOUNTABILITY)
    points += _preference_points(a.match_preference, b.match_preference)
    points += min(5 * len(a.tech_interests & b.tech_interests), 15)
    points += min(3 * len(a.career_goals & b.career_goals), 10)
    points += min(2 * len(a.spiritual_support_needs & b.spiritual_support_needs), 5)
    return round(points / MAX_POINTS, 2)
