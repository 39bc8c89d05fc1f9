from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ddmatch.config import match_limit, members_data_path
from ddmatch.matching import generate_all_matches
from ddmatch.models import member_from_document

OUT_PATH = ROOT / "data" / "match_results.json"


def main() -> None:
    source = members_data_path()
    documents = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(documents, list):
        raise ValueError("members source must be a JSON array")
    members = [member_from_document(doc) for doc in documents]

    out = {
        "source": source.name,
        "member_count": len(members),
        "matches": generate_all_matches(members, limit=match_limit()),
    }

    OUT_PATH.write_text(json.dumps(out, indent=2), encoding="utf-8")
    print(f"Wrote match results for {len(members)} members to {OUT_PATH}")


if __name__ == "__main__":
    main()
