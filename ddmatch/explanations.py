from __future__ import annotations

from typing import Dict, List

from ddmatch.models import Member
from ddmatch.subscores import SUBSCORERS, normalized_words, stage_subscore

STRONG_DIMENSION = 0.75

DIMENSION_REASONS: Dict[str, str] = {
    "stage": "compatible stage and mentorship preferences",
    "pods": "shared pods",
    "tech": "overlapping tech interests and career goals",
    "faith": "aligned faith season and support needs",
    "habits": "similar habits and accountability rhythm",
    "availability": "overlapping availability",
    "personality": "similar community preferences",
    "social_chemistry": "shared hobbies and sports",
}


def _shared(label: str, values: set, limit: int = 3) -> str:
    return f"{label}: " + ", ".join(sorted(values)[:limit])


def match_highlights(a: Member, b: Member) -> List[str]:
    """Short reasons a pairing works, strongest dimensions first."""
    signals = [(name, scorer(a, b)) for name, scorer in SUBSCORERS]
    reasons = [DIMENSION_REASONS[name] for name, value in signals if value >= STRONG_DIMENSION]

    if a.match_preference == "mentor" and b.match_preference == "mentee" and stage_subscore(a, b) >= 0.7:
        reasons.append(f"{b.display_name} is open to mentoring")
    if b.match_preference == "mentor" and a.match_preference == "mentee" and stage_subscore(a, b) >= 0.7:
        reasons.append(f"{b.display_name} is looking for a mentor")

    shared_pods = set(a.pods & b.pods)
    if shared_pods:
        reasons.append(_shared("both in", shared_pods))
    shared_words = {w for w in normalized_words(a) & normalized_words(b) if w}
    if shared_words:
        reasons.append(_shared("both describe themselves as", shared_words))
    shared_hobbies = set(a.hobbies & b.hobbies)
    if shared_hobbies:
        reasons.append(_shared("shared hobbies", shared_hobbies))
    shared_sports = set(a.sports_they_watch & b.sports_they_watch)
    if shared_sports:
        reasons.append(_shared("both watch", shared_sports))
    return reasons


def match_rationale(a: Member, b: Member, score: float) -> str:
    reasons = match_highlights(a, b)[:3]
    if not reasons:
        reasons = ["complementary profiles worth an intro"]
    return f"{a.display_name} ↔ {b.display_name} ({round(score)}%): " + "; ".join(reasons) + "."
