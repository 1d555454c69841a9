import pytest

from plugins.page_ranges.core import (
    PageSelection,
    PageSelectionError,
    require_pages,
    select_pages,
    to_indices,
)


def test_to_indices_is_zero_based():
    assert to_indices([1, 5, 3]) == [0, 4, 2]
    assert to_indices([]) == []


def test_select_pages_exposes_indices_and_count():
    selection = select_pages("2-3,1", 5)
    assert selection == PageSelection(pages=(2, 3, 1), page_count=5)
    assert selection.indices == [1, 2, 0]
    assert selection.count == 3
    assert selection


def test_blank_specification_uses_default():
    assert select_pages("", 4).pages == ()
    assert select_pages("", 4, default="all").pages == (1, 2, 3, 4)
    assert select_pages("  ", 4, default="last").pages == (4,)
    assert select_pages(None, 0, default="last").pages == ()


def test_malformed_specification_does_not_fall_back_to_default():
    selection = select_pages("bogus", 4, default="all")
    assert selection.pages == ()
    assert not selection


def test_unknown_default_is_rejected():
    with pytest.raises(PageSelectionError):
        select_pages("1", 4, default="first")


def test_require_pages_rejects_empty_selection():
    assert require_pages("1-2", 4).pages == (1, 2)
    with pytest.raises(PageSelectionError, match="No valid pages selected"):
        require_pages("0,9", 4)
    with pytest.raises(PageSelectionError):
        require_pages("", 4)


def test_selection_reports_ignored_segments():
    selection = select_pages("a,1-b,4,20", 10)
    assert selection.pages == (1, 4)
    assert selection.ignored == ("a", "20")
    assert select_pages("", 3, default="all").ignored == ()
