from __future__ import annotations

import logging
import os
import uuid
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ddmatch.config import log_level, match_limit, min_pool_size, slack_workspace
from ddmatch.explanations import match_highlights, match_rationale
from ddmatch.matching import classify_match, match_score, rank_matches_for_member, score_breakdown
from ddmatch.models import Member, member_from_document, member_summary
from ddmatch.onboarding import OnboardingPayload
from ddmatch.quick_rubric import quick_match_score

logger = logging.getLogger(__name__)

Rubric = Literal["full", "quick"]


class ScoreRequest(BaseModel):
    a: Dict[str, Any]
    b: Dict[str, Any]
    rubric: Rubric = "full"


class MatchesRequest(BaseModel):
    target: Dict[str, Any]
    candidates: List[Dict[str, Any]] = Field(default_factory=list)
    limit: Optional[int] = Field(default=None, ge=1, le=50)
    rubric: Rubric = "full"


class OnboardingPreviewRequest(BaseModel):
    member: OnboardingPayload
    chat_user_id: Optional[str] = None


app = FastAPI(
    title="Accountability Match API",
    description="Pairwise compatibility scoring and ranking for onboarded members.",
    version="0.2.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    logging.basicConfig(level=log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _member(doc: Dict[str, Any]) -> Member:
    try:
        return member_from_document(doc)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _quick_ranked(target: Member, candidates: List[Member]) -> List[Dict[str, Any]]:
    rows = [
        {"member": m, "score": quick_match_score(target, m)}
        for m in candidates
        if m.id != target.id
    ]
    return sorted(rows, key=lambda r: r["score"], reverse=True)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/score")
def score_pair(payload: ScoreRequest) -> Dict[str, Any]:
    a, b = _member(payload.a), _member(payload.b)
    if a.id == b.id:
        raise HTTPException(status_code=400, detail="a member cannot be scored against itself")

    if payload.rubric == "quick":
        score = quick_match_score(a, b)
        return {"rubric": "quick", "score": score, "tier": classify_match(score * 100)}

    breakdown = score_breakdown(a, b)
    score = match_score(a, b)
    return {
        "rubric": "full",
        "score": round(score, 2),
        "tier": classify_match(score),
        "breakdown": {k: round(v, 2) for k, v in breakdown.items()},
        "highlights": match_highlights(a, b),
        "rationale": match_rationale(a, b, score),
    }


@app.post("/api/matches")
def matches(payload: MatchesRequest) -> Dict[str, Any]:
    target = _member(payload.target)
    candidates = [_member(doc) for doc in payload.candidates]
    total_members = len({target.id, *(c.id for c in candidates)})

    if total_members < min_pool_size():
        return {"matches": [], "totalMembers": total_members, "message": "Not enough members yet"}

    limit = payload.limit or match_limit()
    logger.info("ranking %d candidates for %s (rubric=%s)", len(candidates), target.id, payload.rubric)

    if payload.rubric == "quick":
        rows = [
            {**member_summary(r["member"]), "matchScore": r["score"], "tier": classify_match(r["score"] * 100)}
            for r in _quick_ranked(target, candidates)[:limit]
        ]
        return {"matches": rows, "totalMembers": total_members}

    rows = [
        {
            **member_summary(r.member),
            "matchScore": round(r.score, 2),
            "tier": r.tier,
            "highlights": match_highlights(target, r.member),
        }
        for r in rank_matches_for_member(target, candidates)[:limit]
    ]
    return {"matches": rows, "totalMembers": total_members}


@app.post("/api/onboarding/preview")
def onboarding_preview(payload: OnboardingPreviewRequest) -> Dict[str, Any]:
    member_id = f"m_{uuid.uuid4().hex[:12]}"
    document = payload.member.to_document(chat_user_id=payload.chat_user_id, workspace=slack_workspace())
    member = member_from_document(document, member_id=member_id)
    return {"id": member_id, "document": document, "member": member_summary(member)}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))
