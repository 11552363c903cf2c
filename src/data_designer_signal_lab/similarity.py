from __future__ import annotations

import re
from typing import Iterable

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute all cost 1)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def _compact(text: str) -> str:
    return _NON_ALNUM_RE.sub("", text.lower())


def closest_match(query: str, candidates: Iterable[str], max_distance: int = 3) -> str | None:
    """Return the candidate closest to ``query``, or None if nothing is within ``max_distance``.

    Both sides are compared lower-cased with punctuation and spaces removed. A
    candidate whose compact form appears inside the query counts as distance 0.
    """
    compact_query = _compact(query)
    if not compact_query:
        return None

    best: tuple[int, str] | None = None
    for candidate in candidates:
        compact = _compact(candidate)
        if not compact:
            continue
        distance = 0 if compact in compact_query else levenshtein(compact, compact_query)
        if best is None or distance < best[0]:
            best = (distance, candidate)
    if best is not None and best[0] <= max_distance:
        return best[1]
    return None
