from __future__ import annotations

import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_MEMBERS_PATH = ROOT / "data" / "sample_members.json"

DEFAULT_MATCH_LIMIT = 3
DEFAULT_MIN_POOL_SIZE = 5


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def match_limit() -> int:
    return max(_int_env("MATCH_LIMIT", DEFAULT_MATCH_LIMIT), 1)


def min_pool_size() -> int:
    return max(_int_env("MIN_POOL_SIZE", DEFAULT_MIN_POOL_SIZE), 0)


def log_level() -> str:
    return os.getenv("DDMATCH_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def members_data_path() -> Path:
    raw = os.getenv("MEMBERS_DATA_PATH", "").strip()
    return Path(raw) if raw else DEFAULT_MEMBERS_PATH


def slack_workspace() -> str:
    return os.getenv("SLACK_WORKSPACE", "debuggingdisciples").strip() or "debuggingdisciples"
