import pytest

from tuihist.layout import (
    Constraint,
    ConstraintKind,
    Direction,
    Layout,
    Margin,
    Rect,
)


def test_vertical_split_by_height():
    target = Rect(2, 2, 10, 10)
    chunks = (
        Layout()
        .with_direction(Direction.VERTICAL)
        .with_constraints(
            [Constraint.percentage(10), Constraint.maximum(5), Constraint.minimum(1)]
        )
        .split(target)
    )
    assert sum(r.height for r in chunks) == target.height
    assert all(a.y <= b.y for a, b in zip(chunks, chunks[1:]))


def test_vertical_split_length_and_min():
    chunks = (
        Layout()
        .with_direction(Direction.VERTICAL)
        .with_constraints([Constraint.length(5), Constraint.minimum(0)])
        .split(Rect(2, 2, 10, 10))
    )
    assert chunks == (Rect(2, 2, 10, 5), Rect(2, 7, 10, 5))


def test_horizontal_split_by_ratio():
    chunks = (
        Layout()
        .with_direction(Direction.HORIZONTAL)
        .with_constraints([Constraint.ratio(1, 3), Constraint.ratio(2, 3)])
        .split(Rect(0, 0, 9, 2))
    )
    assert chunks == (Rect(0, 0, 3, 2), Rect(3, 0, 6, 2))


def test_split_with_margin():
    chunks = (
        Layout()
        .with_direction(Direction.HORIZONTAL)
        .with_margin(1)
        .with_constraints([Constraint.percentage(50), Constraint.percentage(50)])
        .split(Rect(0, 0, 10, 5))
    )
    assert chunks == (Rect(1, 1, 4, 3), Rect(5, 1, 4, 3))


def test_split_without_expand_to_fill():
    chunks = (
        Layout()
        .with_expand_to_fill(False)
        .with_constraints([Constraint.length(3), Constraint.length(2)])
        .split(Rect(0, 0, 4, 10))
    )
    assert chunks == (Rect(0, 0, 4, 3), Rect(0, 3, 4, 2))


def test_split_without_constraints_is_empty():
    assert Layout().split(Rect(0, 0, 10, 10)) == ()


def test_split_is_cached():
    layout = Layout().with_constraints([Constraint.length(1), Constraint.minimum(0)])
    first = layout.split(Rect(0, 0, 5, 5))
    second = layout.split(Rect(0, 0, 5, 5))
    assert first is second
    assert first == (Rect(0, 0, 5, 1), Rect(0, 1, 5, 4))


def test_margin_builders():
    layout = Layout().with_margin(2).with_horizontal_margin(1)
    assert layout.margin == Margin(vertical=2, horizontal=1)
    assert layout.with_vertical_margin(0).margin == Margin(vertical=0, horizontal=1)


@pytest.mark.parametrize(
    "constraint, length, expected",
    [
        (Constraint.percentage(50), 10, 5),
        (Constraint.ratio(1, 3), 9, 3),
        (Constraint.length(5), 3, 3),
        (Constraint.length(5), 10, 5),
        (Constraint.maximum(5), 10, 5),
        (Constraint.minimum(5), 3, 5),
    ],
)
def test_constraint_apply(constraint, length, expected):
    assert constraint.apply(length) == expected


def test_constraint_ratio_fields():
    c = Constraint.ratio(2, 7)
    assert (c.kind, c.value, c.denominator) == (ConstraintKind.RATIO, 2, 7)


def test_rect_size_truncation():
    for width in range(256, 300):
        for height in range(256, 300):
            rect = Rect.clipped(0, 0, width, height)
            assert rect.area() <= 0xFFFF
            assert rect.width < width or rect.height < height
            assert abs(rect.width / rect.height - width / height) < 1.0

    rect = Rect.clipped(0, 0, 900, 100)
    assert rect.width != 900
    assert rect.height != 100
    assert rect.width < 900 or rect.height < 100


def test_rect_size_preservation():
    for width in range(256):
        for height in range(256):
            rect = Rect.clipped(0, 0, width, height)
            assert (rect.width, rect.height) == (width, height)

    rect = Rect.clipped(0, 0, 300, 100)
    assert (rect.width, rect.height) == (300, 100)


def test_rect_edges_saturate():
    rect = Rect(65000, 10, 1000, 5)
    assert rect.left() == 65000
    assert rect.right() == 0xFFFF
    assert rect.top() == 10
    assert rect.bottom() == 15


def test_rect_inner():
    assert Rect(0, 0, 10, 6).inner(Margin(vertical=1, horizontal=2)) == Rect(2, 1, 6, 4)
    assert Rect(0, 0, 3, 6).inner(Margin(vertical=1, horizontal=2)) == Rect()


def test_rect_union_and_intersection():
    a = Rect(0, 0, 2, 2)
    b = Rect(3, 3, 1, 1)
    assert a.union(b) == Rect(0, 0, 4, 4)
    assert Rect(0, 0, 4, 4).intersection(Rect(2, 2, 4, 4)) == Rect(2, 2, 2, 2)


def test_rect_intersects():
    assert Rect(0, 0, 4, 4).intersects(Rect(2, 2, 4, 4))
    assert not Rect(0, 0, 2, 2).intersects(Rect(2, 2, 2, 2))