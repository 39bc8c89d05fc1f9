"""Per-dimension compatibility signals.

Every function here takes two members and returns a value in [0, 1]. Unknown
enum values fall through to the default level of their mapping, and empty
tag fields simply contribute no overlap.
"""

from __future__ import annotations

from typing import Callable, List, Tuple

from ddmatch.models import Member
from ddmatch.utils import jaccard

EARLIER_STAGES = {"college", "transfer", "gap_year"}

FAITH_SEASON_LEVELS = {
    "exploring": 1,
    "recently_committed": 2,
    "growing_consistent": 3,
    "mature_mentoring": 4,
}
DEFAULT_FAITH_LEVEL = 2
MATURE_SEASONS = {"growing_consistent", "mature_mentoring"}
SHARED_SUPPORT_NEEDS = ("accountability", "prayer_partners", "bible_study_partners")
SUPPORT_STEP = 0.3
SUPPORT_FULL = 0.9

ACCOUNTABILITY_LEVELS = {"light": 1, "weekly": 2, "group": 2, "daily": 3, "unsure": 2}
DEFAULT_ACCOUNTABILITY_LEVEL = 2

PEER_PREFERENCES = {"peer", "no_preference"}
TECH_POINTS_CAP = 15.0


# ---------- stage & mentorship ----------


def stage_rank(stage: str) -> int:
    return 1 if stage in EARLIER_STAGES else 2


def _wants_peer(member: Member) -> bool:
    return member.match_preference in PEER_PREFERENCES


def _peer_match(a: Member, b: Member) -> float | None:
    if _wants_peer(a) and _wants_peer(b) and stage_rank(a.stage) == stage_rank(b.stage):
        return 1.0
    return None


def _a_mentored_by_b(a: Member, b: Member) -> float | None:
    if a.match_preference == "mentor" and b.match_preference == "mentee":
        return 1.0 if stage_rank(b.stage) <= stage_rank(a.stage) else 0.7
    return None


def _b_mentored_by_a(a: Member, b: Member) -> float | None:
    if b.match_preference == "mentor" and a.match_preference == "mentee":
        return 1.0 if stage_rank(a.stage) <= stage_rank(b.stage) else 0.7
    return None


def _flexible_with_role(a: Member, b: Member) -> float | None:
    roles = {"mentor", "mentee"}
    if (_wants_peer(a) and b.match_preference in roles) or (_wants_peer(b) and a.match_preference in roles):
        return 0.7
    return None


# Evaluated in order, first rule returning a value wins. The two mentorship
# rules are directional and must stay separate.
STAGE_RULES: Tuple[Callable[[Member, Member], float | None], ...] = (
    _peer_match,
    _a_mentored_by_b,
    _b_mentored_by_a,
    _flexible_with_role,
)
STAGE_FALLBACK = 0.2


def stage_subscore(a: Member, b: Member) -> float:
    for rule in STAGE_RULES:
        result = rule(a, b)
        if result is not None:
            return result
    return STAGE_FALLBACK


# ---------- pods ----------


def pods_subscore(a: Member, b: Member) -> float:
    return jaccard(a.pods, b.pods)


# ---------- tech interests & career goals ----------


def tech_subscore(a: Member, b: Member) -> float:
    points = 10 * jaccard(a.tech_interests, b.tech_interests) + 5 * jaccard(a.career_goals, b.career_goals)
    major_a, major_b = a.major.lower(), b.major.lower()
    if major_a and major_b and major_a == major_b:
        points += 1
    return min(points, TECH_POINTS_CAP) / TECH_POINTS_CAP


# ---------- faith season & support needs ----------


def faith_level(season: str) -> int:
    return FAITH_SEASON_LEVELS.get(season, DEFAULT_FAITH_LEVEL)


def faith_season_subscore(a: Member, b: Member) -> float:
    distance = abs(faith_level(a.faith_season) - faith_level(b.faith_season))
    if distance == 0:
        return 1.0
    if distance == 1:
        return 0.7
    if distance == 2:
        return 0.4
    return 0.2


def faith_support_subscore(a: Member, b: Member) -> float:
    needs_a, needs_b = a.spiritual_support_needs, b.spiritual_support_needs
    raw = 0.0
    if "mentorship" in needs_a and b.faith_season in MATURE_SEASONS:
        raw += SUPPORT_STEP
    if "mentorship" in needs_b and a.faith_season in MATURE_SEASONS:
        raw += SUPPORT_STEP
    for need in SHARED_SUPPORT_NEEDS:
        if need in needs_a and need in needs_b:
            raw += SUPPORT_STEP
    return min(1.0, raw / SUPPORT_FULL)


def faith_subscore(a: Member, b: Member) -> float:
    return (9 * faith_season_subscore(a, b) + 6 * faith_support_subscore(a, b)) / 15


# ---------- habits & accountability ----------


def accountability_level(level: str) -> int:
    return ACCOUNTABILITY_LEVELS.get(level, DEFAULT_ACCOUNTABILITY_LEVEL)


def accountability_subscore(a: Member, b: Member) -> float:
    diff = abs(accountability_level(a.accountability_level) - accountability_level(b.accountability_level))
    if diff == 0:
        return 1.0
    if diff == 1:
        return 0.7
    return 0.3


def habits_and_accountability_subscore(a: Member, b: Member) -> float:
    return (10 * jaccard(a.habits, b.habits) + 5 * accountability_subscore(a, b)) / 15


# ---------- availability & timezone ----------


def timezone_subscore(a: Member, b: Member) -> float:
    diff = abs(a.timezone_offset_hours - b.timezone_offset_hours)
    if diff == 0:
        return 1.0
    if diff <= 2:
        return 0.7
    if diff <= 5:
        return 0.4
    return 0.2


def availability_subscore(a: Member, b: Member) -> float:
    return (4 * timezone_subscore(a, b) + 6 * jaccard(a.availability_slots, b.availability_slots)) / 10


# ---------- personality & community ----------


def normalized_words(member: Member) -> set[str]:
    return {w.strip().lower() for w in member.personality_words}


def personality_words_subscore(a: Member, b: Member) -> float:
    shared = len(normalized_words(a) & normalized_words(b))
    if shared == 0:
        return 0.0
    if shared == 1:
        return 0.5
    return 1.0


def personality_subscore(a: Member, b: Member) -> float:
    env = jaccard(a.community_environment, b.community_environment)
    return (3.5 * env + 1.5 * personality_words_subscore(a, b)) / 5


# ---------- social chemistry ----------


def sports_subscore(a: Member, b: Member) -> float:
    a_none, b_none = not a.sports_they_watch, not b.sports_they_watch
    if a_none and b_none:
        return 0.0
    if a_none or b_none:
        return 0.2

    overlap = jaccard(a.sports_they_watch, b.sports_they_watch)
    if overlap == 1:
        return 1.0
    if overlap >= 0.5:
        return 0.7
    if overlap > 0:
        return 0.4
    return 0.3


def social_chemistry_subscore(a: Member, b: Member) -> float:
    return (6 * jaccard(a.hobbies, b.hobbies) + 4 * sports_subscore(a, b)) / 10


SUBSCORERS: List[Tuple[str, Callable[[Member, Member], float]]] = [
    ("stage", stage_subscore),
    ("pods", pods_subscore),
    ("tech", tech_subscore),
    ("faith", faith_subscore),
    ("habits", habits_and_accountability_subscore),
    ("availability", availability_subscore),
    ("personality", personality_subscore),
    ("social_chemistry", social_chemistry_subscore),
]
