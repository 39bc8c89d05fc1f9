from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ddmatch.explanations import match_highlights
from ddmatch.models import MatchTier, Member, ScoredCandidate, member_summary
from ddmatch.subscores import SUBSCORERS

logger = logging.getLogger(__name__)

DIMENSION_WEIGHTS = {
    "stage": 20.0,
    "pods": 15.0,
    "tech": 15.0,
    "faith": 15.0,
    "habits": 15.0,
    "availability": 10.0,
    "personality": 5.0,
    "social_chemistry": 5.0,
}

TIER_THRESHOLDS: Tuple[Tuple[float, MatchTier], ...] = (
    (80.0, "strong"),
    (65.0, "good"),
    (50.0, "soft"),
)


def _clamp_score(total: float) -> float:
    return max(0.0, min(100.0, total))


def score_breakdown(a: Member, b: Member) -> Dict[str, float]:
    """Weighted points per dimension; the values add up to the match score."""
    return {name: DIMENSION_WEIGHTS[name] * scorer(a, b) for name, scorer in SUBSCORERS}


def match_score(a: Member, b: Member) -> float:
    return _clamp_score(sum(score_breakdown(a, b).values()))


def classify_match(score: float) -> MatchTier:
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return "weak"


def rank_matches_for_member(target: Member, candidates: Sequence[Member]) -> List[ScoredCandidate]:
    results: List[ScoredCandidate] = []
    for member in candidates:
        if member.id == target.id:
            continue
        score = match_score(target, member)
        results.append(ScoredCandidate(member=member, score=score, tier=classify_match(score)))

    logger.debug("ranked %d candidates for member %s", len(results), target.id)
    # sorted() is stable, equal scores keep their input order.
    return sorted(results, key=lambda x: x.score, reverse=True)


def top_matches(target: Member, candidates: Sequence[Member], limit: int = 3) -> List[ScoredCandidate]:
    return rank_matches_for_member(target, candidates)[: max(limit, 0)]


def generate_all_matches(members: Sequence[Member], limit: Optional[int] = None) -> Dict[str, List[Dict[str, Any]]]:
    by_member: Dict[str, List[Dict[str, Any]]] = {}

    for member in members:
        ranked = rank_matches_for_member(member, members)
        if limit is not None:
            ranked = ranked[:limit]
        by_member[member.id] = [
            {
                "target_id": r.member.id,
                "target_name": r.member.display_name,
                "priority_rank": idx + 1,
                "score": round(r.score, 2),
                "tier": r.tier,
                "breakdown": {k: round(v, 2) for k, v in score_breakdown(member, r.member).items()},
                "highlights": match_highlights(member, r.member),
                "member": member_summary(r.member),
            }
            for idx, r in enumerate(ranked)
        ]

    return by_member
