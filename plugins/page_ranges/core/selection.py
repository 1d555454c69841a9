"""Caller-side helpers turning page range text into document page selections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal

from .page_ranges import explain_ranges

BlankDefault = Literal["none", "all", "last"]
BLANK_DEFAULTS = ("none", "all", "last")


class PageSelectionError(ValueError):
    """Raised when a page selection cannot be used by a document tool."""


@dataclass(frozen=True)
class PageSelection:
    """Resolved 1-indexed pages for a document with ``page_count`` pages.

    ``ignored`` holds the typed segments that selected nothing.
    """

    pages: tuple[int, ...]
    page_count: int
    ignored: tuple[str, ...] = ()

    @property
    def indices(self) -> List[int]:
        return to_indices(self.pages)

    @property
    def count(self) -> int:
        return len(self.pages)

    def __bool__(self) -> bool:
        return bool(self.pages)


def to_indices(pages: Iterable[int]) -> List[int]:
    """Convert 1-indexed page numbers to zero-based indices."""

    return [page - 1 for page in pages]


def _blank_pages(default: str, page_count: int) -> List[int]:
    if default == "none":
        return []
    if default == "all":
        return list(range(1, page_count + 1))
    return [page_count] if page_count >= 1 else []


def select_pages(
    specification: str | None, page_count: int, *, default: BlankDefault = "none"
) -> PageSelection:
    """Resolve ``specification`` against ``page_count``.

    A blank specification selects ``default`` pages: nothing, every page or
    only the last page. Malformed text is never an error here, it simply
    selects fewer pages.
    """

    if default not in BLANK_DEFAULTS:
        raise PageSelectionError(f"Unknown blank default: {default!r}")
    if not str(specification or "").strip():
        pages = _blank_pages(default, page_count)
        return PageSelection(pages=tuple(pages), page_count=page_count)
    result = explain_ranges(specification, page_count)
    return PageSelection(
        pages=tuple(result.pages),
        page_count=page_count,
        ignored=tuple(result.ignored),
    )


def require_pages(
    specification: str | None, page_count: int, *, default: BlankDefault = "none"
) -> PageSelection:
    """Like :func:`select_pages` but reject an empty selection."""

    selection = select_pages(specification, page_count, default=default)
    if not selection:
        raise PageSelectionError("No valid pages selected.")
    return selection


__all__ = [
    "BLANK_DEFAULTS",
    "BlankDefault",
    "PageSelection",
    "PageSelectionError",
    "require_pages",
    "select_pages",
    "to_indices",
]
