import pytest

from list_engine.errors import BoundsError
from list_engine.selection import ListSelection, SelectionRange


def fmt(rng: SelectionRange) -> str:
    return f"{rng.anchor}/{rng.head}"


def covered(ranges: tuple[SelectionRange, ...]) -> set[int]:
    return {i for rng in ranges for i in rng.positions()}


def test_create_rejects_empty_or_reversed_span() -> None:
    with pytest.raises(BoundsError):
        SelectionRange.create(3, 3)
    with pytest.raises(BoundsError):
        SelectionRange.create(4, 2)


def test_anchor_and_head_follow_direction() -> None:
    forward = SelectionRange.create(2, 5)
    backward = SelectionRange.create(2, 5, inverted=True)

    assert (forward.anchor, forward.head) == (2, 5)
    assert (backward.anchor, backward.head) == (5, 2)
    assert forward.length == backward.length == 3
    assert SelectionRange(7, 8).single
    assert not forward.single


def test_range_factory_inverts_when_head_precedes_anchor() -> None:
    rng = ListSelection.range(3, 2)

    assert (rng.start, rng.end, rng.inverted) == (2, 3, True)
    assert fmt(rng) == "3/2"


def test_extend_inverts_downwards() -> None:
    assert fmt(ListSelection.range(5, 6).extend(2)) == "6/2"
    assert fmt(ListSelection.range(5, 7).extend(2)) == "6/2"


def test_extend_inverts_upwards() -> None:
    assert fmt(ListSelection.range(6, 4).extend(7)) == "5/8"


def test_extend_inverted_to_anchor_keeps_a_valid_span() -> None:
    extended = ListSelection.range(6, 4).extend(6)

    assert fmt(extended) == "5/7"
    assert extended.length == 2


def test_extend_keeps_direction_when_not_crossing_anchor() -> None:
    assert fmt(ListSelection.range(6, 3).extend(1)) == "6/1"
    assert fmt(ListSelection.range(2, 4).extend(6)) == "2/7"


def test_shift_preserves_direction() -> None:
    shifted = ListSelection.range(6, 4).shift(-2)

    assert (shifted.start, shifted.end, shifted.inverted) == (2, 4, True)


def test_overlap_distance_and_touch() -> None:
    a = SelectionRange(0, 2)
    b = SelectionRange(2, 4)
    c = SelectionRange(1, 3)
    d = SelectionRange(5, 6)

    assert not a.overlaps(b)
    assert a.touches(b) and b.touches(a)
    assert a.distance_to(b) == 0
    assert a.overlaps(c) and c.overlaps(a)
    assert a.distance_to(c) == -1
    assert d.distance_to(a) == 3
    assert a.contains(1) and not a.contains(2)


def test_subtract_cuts_off_the_end() -> None:
    result = SelectionRange(4, 10).subtract(SelectionRange(6, 12))

    assert result == (SelectionRange(4, 6),)


def test_subtract_cuts_off_the_start() -> None:
    result = SelectionRange(4, 10).subtract(SelectionRange(2, 6))

    assert result == (SelectionRange(6, 10),)


def test_subtract_middle_produces_two_ranges() -> None:
    result = SelectionRange(4, 10).subtract(SelectionRange(6, 8))

    assert result == (SelectionRange(4, 6), SelectionRange(8, 10))


def test_subtract_full_cover_leaves_nothing() -> None:
    assert SelectionRange(4, 10).subtract(SelectionRange(4, 10)) == ()
    assert SelectionRange(4, 10).subtract(SelectionRange(0, 12)) == ()


def test_subtract_without_overlap_returns_self() -> None:
    rng = ListSelection.range(10, 4)

    (result,) = rng.subtract(SelectionRange(12, 14))

    assert result is rng


def test_subtract_matches_set_difference() -> None:
    spans = [(s, e) for s in range(0, 6) for e in range(s + 1, 7)]
    for a_start, a_end in spans:
        for b_start, b_end in spans:
            a = SelectionRange(a_start, a_end)
            b = SelectionRange(b_start, b_end)
            expected = set(a.positions()) - set(b.positions())
            assert covered(a.subtract(b)) == expected, (a, b)
