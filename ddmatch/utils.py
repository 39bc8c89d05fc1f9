from __future__ import annotations

from typing import Any, Iterable, Optional


def safe_divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def jaccard(a: Optional[Iterable[Any]], b: Optional[Iterable[Any]]) -> float:
    sa, sb = set(a or ()), set(b or ())
    return safe_divide(len(sa & sb), len(sa | sb))
