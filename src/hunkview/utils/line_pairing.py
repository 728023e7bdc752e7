"""Left/right alignment of diff lines for the side-by-side view.

The default strategy is positional: a run of removals is lined up
index-for-index with the run of additions that follows it. The
``similarity`` strategy instead matches lines by content using difflib
ratios, keeping order on both sides.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Callable, Optional, Sequence

from .diff_engine import DiffLine, DiffLineKind

SIMILARITY_THRESHOLD = 0.5
MAX_SIMILARITY_BLOCK = 200


@dataclass(frozen=True)
class SplitLine:
    """One row of the split view; at least one side is present."""

    left: Optional[DiffLine] = None
    right: Optional[DiffLine] = None

    def __post_init__(self):
        if self.left is None and self.right is None:
            raise ValueError("a split line needs at least one side")

    @property
    def is_hunk_header(self) -> bool:
        return self.left is not None and self.left.kind is DiffLineKind.HUNK_HEADER


BlockAligner = Callable[[Sequence[DiffLine], Sequence[DiffLine]], list[SplitLine]]


def _align_positional(removed: Sequence[DiffLine], added: Sequence[DiffLine]) -> list[SplitLine]:
    rows = []
    for index in range(max(len(removed), len(added))):
        left = removed[index] if index < len(removed) else None
        right = added[index] if index < len(added) else None
        rows.append(SplitLine(left, right))
    return rows


def _similarity(a: str, b: str) -> float:
    return SequenceMatcher(None, a, b).ratio()


def _align_by_similarity(removed: Sequence[DiffLine], added: Sequence[DiffLine]) -> list[SplitLine]:
    """Order-preserving best match of removals to additions.

    Dynamic programming over the two runs maximising the summed similarity
    of matched pairs; pairs below the threshold are never matched.
    """
    n, m = len(removed), len(added)
    if n == 0 or m == 0 or n > MAX_SIMILARITY_BLOCK or m > MAX_SIMILARITY_BLOCK:
        return _align_positional(removed, added)

    ratios = [[_similarity(r.content, a.content) for a in added] for r in removed]

    # score[i][j]: best total for removed[i:] against added[j:]
    score = [[0.0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        for j in range(m - 1, -1, -1):
            best = max(score[i + 1][j], score[i][j + 1])
            if ratios[i][j] >= SIMILARITY_THRESHOLD:
                best = max(best, ratios[i][j] + score[i + 1][j + 1])
            score[i][j] = best

    rows: list[SplitLine] = []
    i = j = 0
    while i < n and j < m:
        ratio = ratios[i][j]
        if ratio >= SIMILARITY_THRESHOLD and score[i][j] == ratio + score[i + 1][j + 1]:
            rows.append(SplitLine(removed[i], added[j]))
            i += 1
            j += 1
        elif score[i][j] == score[i + 1][j]:
            rows.append(SplitLine(left=removed[i]))
            i += 1
        else:
            rows.append(SplitLine(right=added[j]))
            j += 1
    rows.extend(SplitLine(left=line) for line in removed[i:])
    rows.extend(SplitLine(right=line) for line in added[j:])
    return rows


STRATEGIES: dict[str, BlockAligner] = {
    "positional": _align_positional,
    "similarity": _align_by_similarity,
}


def pair_lines(lines: Sequence[DiffLine], strategy: str = "positional") -> list[SplitLine]:
    """Pair parsed diff lines into rows for the split view.

    Args:
        lines: Parsed lines in diff order
        strategy: "positional" (default) or "similarity"

    Returns:
        Rows in display order. Hunk headers occupy the left side only;
        context lines appear on both sides.
    """
    try:
        align = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown pairing strategy: {strategy!r}") from None

    rows: list[SplitLine] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.kind is DiffLineKind.HUNK_HEADER:
            rows.append(SplitLine(left=line))
            i += 1
        elif line.kind is DiffLineKind.CONTEXT:
            rows.append(SplitLine(line, line))
            i += 1
        elif line.kind is DiffLineKind.REMOVED:
            start = i
            while i < len(lines) and lines[i].kind is DiffLineKind.REMOVED:
                i += 1
            removed = lines[start:i]
            start = i
            while i < len(lines) and lines[i].kind is DiffLineKind.ADDED:
                i += 1
            rows.extend(align(removed, lines[start:i]))
        else:
            # Addition with no removal run before it
            rows.append(SplitLine(right=line))
            i += 1
    return rows
