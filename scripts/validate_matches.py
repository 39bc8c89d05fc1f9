from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ddmatch.config import match_limit

MATCHES_PATH = ROOT / "data" / "match_results.json"

TIERS = {"strong", "good", "soft", "weak"}


def main() -> None:
    payload = json.loads(MATCHES_PATH.read_text(encoding="utf-8"))
    matches = payload.get("matches", {})
    limit = match_limit()
    assert matches, "missing matches"
    assert len(matches) == payload.get("member_count"), "member_count does not match ranked members"

    for member_id, ranked in matches.items():
        assert ranked, f"no matches for {member_id}"
        assert len(ranked) <= limit, f"{member_id} has more than {limit} matches"
        scores = [float(x["score"]) for x in ranked]
        assert scores == sorted(scores, reverse=True), f"Scores not sorted for {member_id}"
        for row in ranked:
            assert row["target_id"] != member_id, f"{member_id} matched with itself"
            assert 0.0 <= row["score"] <= 100.0, f"score out of range for {member_id}->{row['target_id']}"
            assert row["tier"] in TIERS, f"invalid tier for {member_id}->{row['target_id']}"

    print("Match validation passed")


if __name__ == "__main__":
    main()
