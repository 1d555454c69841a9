"""Utilities for parsing human-typed page range strings.

The parser is tolerant: segments it cannot understand are skipped instead of
raising, so a free-text field never faults and at worst selects fewer pages.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Literal

SegmentKind = Literal["closed", "open_end", "open_start", "single"]

_CLOSED_RE = re.compile(r"^(\d+)\s*-\s*(\d+)$", re.ASCII)
_OPEN_END_RE = re.compile(r"^(\d+)\s*-\s*$", re.ASCII)
_OPEN_START_RE = re.compile(r"^\s*-\s*(\d+)$", re.ASCII)
# Leading integer literal; anything after it is ignored.
_LEADING_INT_RE = re.compile(r"^[+-]?(\d+)", re.ASCII)


@dataclass(frozen=True)
class Segment:
    """A classified segment with its unswapped, unclamped bounds."""

    text: str
    kind: SegmentKind
    start: int
    end: int


@dataclass(frozen=True)
class PageRangeParseResult:
    pages: List[int]
    ignored: List[str] = field(default_factory=list)


def iter_segments(specification: object) -> Iterator[str]:
    """Yield the trimmed, non-empty comma separated segments."""

    text = str(specification or "").strip()
    if not text:
        return
    for part in text.split(","):
        part = part.strip()
        if part:
            yield part


def _bounded_int(digits: str, upper_bound: int) -> int:
    """Convert an ASCII digit run, saturating at ``upper_bound + 1``.

    Every value past the bound behaves the same when clamping or dropping,
    so long digit runs are never handed to ``int``.
    """

    ceiling = max(upper_bound, 0) + 1
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(ceiling)):
        return ceiling
    return min(int(digits), ceiling)


def classify_segment(text: str, upper_bound: int) -> Segment | None:
    """Return the shape of ``text`` or ``None`` when it is not a page token.

    Bounds are kept as written (not swapped or clamped), except that values
    above ``upper_bound`` are saturated to ``upper_bound + 1``.
    """

    text = text.strip()
    match = _CLOSED_RE.match(text)
    if match:
        return Segment(
            text,
            "closed",
            _bounded_int(match.group(1), upper_bound),
            _bounded_int(match.group(2), upper_bound),
        )
    match = _OPEN_END_RE.match(text)
    if match:
        return Segment(text, "open_end", _bounded_int(match.group(1), upper_bound), upper_bound)
    match = _OPEN_START_RE.match(text)
    if match:
        return Segment(text, "open_start", 1, _bounded_int(match.group(1), upper_bound))
    match = _LEADING_INT_RE.match(text)
    if match:
        value = _bounded_int(match.group(1), upper_bound)
        if text.startswith("-"):
            value = -value
        return Segment(text, "single", value, value)
    return None


def segment_bounds(segment: Segment, upper_bound: int) -> tuple[int, int] | None:
    """Return the inclusive page interval ``segment`` selects, if any."""

    if segment.kind == "single":
        if 1 <= segment.start <= upper_bound:
            return segment.start, segment.start
        return None

    start, end = segment.start, segment.end
    if start > end:
        start, end = end, start
    start = max(1, start)
    end = min(upper_bound, end)
    if start > end:
        return None
    return start, end


def expand_segment(segment: Segment, upper_bound: int) -> List[int]:
    """Return the pages a classified segment contributes, in ascending order."""

    bounds = segment_bounds(segment, upper_bound)
    if bounds is None:
        return []
    return list(range(bounds[0], bounds[1] + 1))


class _Coverage:
    """Disjoint, sorted page intervals already emitted."""

    def __init__(self) -> None:
        self._starts: List[int] = []
        self._ends: List[int] = []

    def claim(self, start: int, end: int) -> List[tuple[int, int]]:
        """Mark ``start..end`` as covered and return the parts that were not."""

        gaps: List[tuple[int, int]] = []
        first = bisect.bisect_left(self._ends, start - 1)
        last = first
        cursor = start
        merged_start, merged_end = start, end
        while last < len(self._starts) and self._starts[last] <= end + 1:
            known_start, known_end = self._starts[last], self._ends[last]
            if known_start > cursor:
                gaps.append((cursor, min(known_start - 1, end)))
            cursor = max(cursor, known_end + 1)
            merged_start = min(merged_start, known_start)
            merged_end = max(merged_end, known_end)
            last += 1
        if cursor <= end:
            gaps.append((cursor, end))
        self._starts[first:last] = [merged_start]
        self._ends[first:last] = [merged_end]
        return gaps


def explain_ranges(specification: object, upper_bound: int) -> PageRangeParseResult:
    """Parse ``specification`` and report which segments were ignored.

    Pages already produced by an earlier segment are skipped without being
    expanded again, so the work is bounded by ``upper_bound`` plus the
    number of segments.
    """

    pages: List[int] = []
    ignored: List[str] = []
    coverage = _Coverage()
    for part in iter_segments(specification):
        segment = classify_segment(part, upper_bound)
        bounds = segment_bounds(segment, upper_bound) if segment else None
        if bounds is None:
            ignored.append(part)
            continue
        for gap_start, gap_end in coverage.claim(*bounds):
            pages.extend(range(gap_start, gap_end + 1))
    return PageRangeParseResult(pages=pages, ignored=ignored)


def parse_ranges(specification: object, upper_bound: int) -> List[int]:
    """Return unique 1-indexed pages described by ``specification``.

    Supports closed (``"1-3"``), open-ended (``"7-"``), open-start (``"-3"``)
    and single (``"5"``) segments separated by commas. Reversed ranges are
    swapped, ranges are clamped to ``[1, upper_bound]`` while out-of-range
    single pages are dropped. Pages keep the order of their first occurrence.
    """

    return explain_ranges(specification, upper_bound).pages


__all__ = [
    "PageRangeParseResult",
    "Segment",
    "SegmentKind",
    "classify_segment",
    "expand_segment",
    "explain_ranges",
    "iter_segments",
    "segment_bounds",
    "parse_ranges",
]
