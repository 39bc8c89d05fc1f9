from __future__ import annotations

import csv
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ddmatch.config import match_limit
from ddmatch.matching import DIMENSION_WEIGHTS

MATCHES_PATH = ROOT / "data" / "match_results.json"
CSV_OUT_PATH = ROOT / "data" / "matches_summary.csv"
MD_OUT_PATH = ROOT / "data" / "matches_summary.md"

DIMENSIONS = list(DIMENSION_WEIGHTS)


def flatten(member_id: str, item: Dict[str, Any]) -> Dict[str, Any]:
    """One CSV row per recommendation, with the weighted points per dimension."""
    breakdown = item.get("breakdown", {})
    row: Dict[str, Any] = {
        "member_id": member_id,
        "rank": item["priority_rank"],
        "match_id": item["target_id"],
        "match_name": item["target_name"],
        "score": item["score"],
        "tier": item["tier"],
    }
    for name in DIMENSIONS:
        row[name] = breakdown.get(name, 0.0)
    return row


def render_markdown(rows: List[Dict[str, Any]], highlights: Dict[tuple, List[str]]) -> str:
    tiers = Counter(r["tier"] for r in rows)
    lines = [
        "# Accountability matches",
        "",
        "Tiers: " + ", ".join(f"{t} {tiers.get(t, 0)}" for t in ("strong", "good", "soft", "weak")),
        "",
        "| Member | # | Match | Score | Tier | Strongest dimension | Highlights |",
        "|---|---:|---|---:|---|---|---|",
    ]
    for r in rows:
        best = max(DIMENSIONS, key=lambda d: r[d] / DIMENSION_WEIGHTS[d])
        why = "; ".join(highlights.get((r["member_id"], r["match_id"]), [])) or "-"
        lines.append(
            f"| {r['member_id']} | {r['rank']} | {r['match_name']} | {r['score']:.2f} | {r['tier']} | {best} | {why} |"
        )
    return "\n".join(lines) + "\n"


def main() -> None:
    payload = json.loads(MATCHES_PATH.read_text(encoding="utf-8"))
    limit = match_limit()

    rows: List[Dict[str, Any]] = []
    highlights: Dict[tuple, List[str]] = {}
    for member_id, ranked in sorted(payload["matches"].items()):
        for item in ranked[:limit]:
            rows.append(flatten(member_id, item))
            highlights[(member_id, item["target_id"])] = item.get("highlights", [])

    with CSV_OUT_PATH.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=["member_id", "rank", "match_id", "match_name", "score", "tier", *DIMENSIONS])
        writer.writeheader()
        writer.writerows(rows)

    MD_OUT_PATH.write_text(render_markdown(rows, highlights), encoding="utf-8")

    print(f"Wrote {len(rows)} rows for {len(payload['matches'])} members to {CSV_OUT_PATH}")
    print(f"Wrote {MD_OUT_PATH}")


if __name__ == "__main__":
    main()
