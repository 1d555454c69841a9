"""Facade for the page range core utilities."""

from __future__ import annotations

from .page_ranges import (
    PageRangeParseResult,
    Segment,
    classify_segment,
    expand_segment,
    explain_ranges,
    iter_segments,
    parse_ranges,
    segment_bounds,
)
from .selection import (
    BLANK_DEFAULTS,
    PageSelection,
    PageSelectionError,
    require_pages,
    select_pages,
    to_indices,
)

__all__ = [
    "BLANK_DEFAULTS",
    "PageRangeParseResult",
    "PageSelection",
    "PageSelectionError",
    "Segment",
    "classify_segment",
    "expand_segment",
    "explain_ranges",
    "iter_segments",
    "parse_ranges",
    "require_pages",
    "segment_bounds",
    "select_pages",
    "to_indices",
]
