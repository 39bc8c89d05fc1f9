from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from ddmatch.models import Member

ROOT = Path(__file__).resolve().parents[1]
SAMPLE_MEMBERS_PATH = ROOT / "data" / "sample_members.json"


def make_member(member_id: str = "a", **overrides: Any) -> Member:
    fields: Dict[str, Any] = dict(
        stage="college",
        faith_season="growing_consistent",
        spiritual_support_needs=frozenset({"mentorship", "accountability"}),
        tech_interests=frozenset({"Web Development", "DevOps"}),
        career_goals=frozenset({"Startup founder"}),
        community_environment=frozenset({"small_group"}),
        personality_words=("Curious", "Kind"),
        habits=frozenset({"Reading", "Early riser"}),
        accountability_level="weekly",
        pods=frozenset({"debug"}),
        timezone_offset_hours=-5,
        availability_slots=frozenset({"weekday_evenings"}),
        match_preference="peer",
        hobbies=frozenset({"chess"}),
        sports_they_watch=frozenset({"NBA"}),
        major="Computer Science",
        institution="Georgia Tech",
        first_name=member_id.title(),
    )
    fields.update(overrides)
    return Member(id=member_id, **fields)


def sample_documents() -> List[Dict[str, Any]]:
    return json.loads(SAMPLE_MEMBERS_PATH.read_text(encoding="utf-8"))
