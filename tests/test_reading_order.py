"""Tests for the reading-order layout."""

from sigil_canvas.core.fragment import Fragment, Position
from sigil_canvas.layouts.reading_order import compute_reading_layout, compute_reading_order


def _frag(fid, y, x=0.0, content=None):
    return Fragment(fid, content if content is not None else fid, Position(x, y))


def test_sorted_by_y_ascending():
    frags = [_frag("a", 300), _frag("b", 50), _frag("c", 150)]
    assert [f.id for f in compute_reading_order(frags)] == ["b", "c", "a"]


def test_ties_keep_input_order():
    frags = [_frag("a", 100, x=500), _frag("b", 100, x=0), _frag("c", 20), _frag("d", 100)]
    assert [f.id for f in compute_reading_order(frags)] == ["c", "a", "b", "d"]


def test_x_is_ignored():
    frags = [_frag("right", 10, x=900), _frag("left", 11, x=0)]
    assert [f.id for f in compute_reading_order(frags)] == ["right", "left"]


def test_negative_and_fractional_y():
    frags = [_frag("a", 0.5), _frag("b", -10), _frag("c", 0.25)]
    assert [f.id for f in compute_reading_order(frags)] == ["b", "c", "a"]


def test_empty():
    assert compute_reading_order([]) == []
    assert compute_reading_layout([]) == []


def test_input_not_mutated():
    frags = [_frag("a", 2), _frag("b", 1)]
    compute_reading_order(frags)
    assert [f.id for f in frags] == ["a", "b"]


def test_reading_layout_items():
    frags = [_frag("a", 300, content="late"), _frag("b", 50, content="early")]
    items = compute_reading_layout(frags)
    assert items == [
        {"id": "b", "rank": 1, "content": "early", "y": 50},
        {"id": "a", "rank": 2, "content": "late", "y": 300},
    ]
