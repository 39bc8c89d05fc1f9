from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Literal, Optional, Tuple

STAGES = ("college", "new_grad", "transfer", "gap_year", "other")
FAITH_SEASONS = ("exploring", "recently_committed", "growing_consistent", "mature_mentoring")
ACCOUNTABILITY_LEVELS = ("light", "weekly", "daily", "group", "unsure")
MATCH_PREFERENCES = ("peer", "mentor", "mentee", "no_preference")
PODS = ("deploy", "debug", "pr_review", "systems_integrity")
TIME_SLOTS = (
    "weekday_mornings",
    "weekday_evenings",
    "weekend_mornings",
    "weekend_evenings",
    "flexible",
    "async_only",
)

MIN_OFFSET_HOURS = -12
MAX_OFFSET_HOURS = 14

MatchTier = Literal["strong", "good", "soft", "weak"]


@dataclass(frozen=True)
class Member:
    id: str
    stage: str = "other"
    faith_season: str = ""
    spiritual_support_needs: FrozenSet[str] = frozenset()
    tech_interests: FrozenSet[str] = frozenset()
    career_goals: FrozenSet[str] = frozenset()
    community_environment: FrozenSet[str] = frozenset()
    personality_words: Tuple[str, ...] = ()
    habits: FrozenSet[str] = frozenset()
    accountability_level: str = "unsure"
    pods: FrozenSet[str] = frozenset()
    timezone_offset_hours: int = 0
    availability_slots: FrozenSet[str] = frozenset()
    match_preference: str = "no_preference"
    hobbies: FrozenSet[str] = frozenset()
    sports_they_watch: FrozenSet[str] = frozenset()
    major: str = ""
    institution: str = ""
    first_name: str = field(default="", compare=False)
    last_name: str = field(default="", compare=False)
    profile_url: str = field(default="", compare=False)
    linkedin_url: str = field(default="", compare=False)

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.id


@dataclass(frozen=True)
class ScoredCandidate:
    member: Member
    score: float
    tier: MatchTier


def _items(value: Any) -> Iterable[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split(",")
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def tag_set(value: Any) -> FrozenSet[str]:
    """Normalize a list, a comma string or None into a set of trimmed tags."""
    return frozenset(t.strip() for t in _items(value) if t.strip())


def word_list(value: Any) -> Tuple[str, ...]:
    return tuple(w.strip() for w in _items(value) if w.strip())


def clamp_offset(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return max(MIN_OFFSET_HOURS, min(MAX_OFFSET_HOURS, int(round(number))))


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _pick(doc: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in doc and doc[key] is not None:
            return doc[key]
    return None


def member_from_document(doc: Dict[str, Any], member_id: Optional[str] = None) -> Member:
    """Build a Member from a stored onboarding document.

    Accepts the camelCase keys the onboarding layer writes as well as the
    snake_case field names. Missing list fields become empty sets and a
    missing or out-of-range offset is clamped into [-12, 14].
    """
    raw_id = member_id if member_id is not None else _pick(doc, "id", "_id")
    if raw_id is None or not str(raw_id).strip():
        raise ValueError("member document missing id")

    return Member(
        id=str(raw_id).strip(),
        stage=_text(_pick(doc, "stage")) or "other",
        faith_season=_text(_pick(doc, "faithSeason", "faith_season")),
        spiritual_support_needs=tag_set(_pick(doc, "spiritualSupportNeeds", "spiritual_support_needs")),
        tech_interests=tag_set(_pick(doc, "techInterests", "tech_interests")),
        career_goals=tag_set(_pick(doc, "careerGoals", "career_goals")),
        community_environment=tag_set(_pick(doc, "communityEnvironment", "community_environment")),
        personality_words=word_list(_pick(doc, "personalityWords", "personality_words")),
        habits=tag_set(_pick(doc, "habits")),
        accountability_level=_text(_pick(doc, "accountabilityLevel", "accountability_level")) or "unsure",
        pods=tag_set(_pick(doc, "pods")),
        timezone_offset_hours=clamp_offset(_pick(doc, "timezoneOffsetHours", "timezone_offset_hours")),
        availability_slots=tag_set(_pick(doc, "availabilitySlots", "availability_slots")),
        match_preference=_text(_pick(doc, "matchPreference", "match_preference")) or "no_preference",
        hobbies=tag_set(_pick(doc, "hobbies", "hobbiesRaw")),
        sports_they_watch=tag_set(_pick(doc, "sportsTheyWatch", "sports_they_watch")),
        major=_text(_pick(doc, "major")),
        institution=_text(_pick(doc, "institution")),
        first_name=_text(_pick(doc, "firstName", "first_name")),
        last_name=_text(_pick(doc, "lastName", "last_name")),
        profile_url=_text(_pick(doc, "profile", "profile_url")),
        linkedin_url=_text(_pick(doc, "linkedinUrl", "linkedin_url")),
    )


def member_summary(member: Member) -> Dict[str, Any]:
    return {
        "id": member.id,
        "firstName": member.first_name,
        "lastName": member.last_name,
        "stage": member.stage,
        "major": member.major,
        "institution": member.institution,
        "faithSeason": member.faith_season,
        "accountabilityLevel": member.accountability_level,
        "matchPreference": member.match_preference,
        "personalityWords": list(member.personality_words),
        "hobbies": sorted(member.hobbies),
        "sportsTheyWatch": sorted(member.sports_they_watch),
        "profile": member.profile_url,
        "linkedinUrl": member.linkedin_url,
    }
