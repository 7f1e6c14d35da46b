"""Rectangles and constraint-based splitting of screen areas."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Iterable, Optional

from scipy.optimize import linprog

_U16_MAX = 0xFFFF

# Weights of the non-required constraint strengths.
_MEDIUM = 1_000.0
_WEAK = 1.0


class Corner(enum.Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"


class Direction(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Alignment(enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class ConstraintKind(enum.Enum):
    PERCENTAGE = "percentage"
    RATIO = "ratio"
    LENGTH = "length"
    MAX = "max"
    MIN = "min"


@dataclass(frozen=True)
class Constraint:
    """A preferred size for one chunk of a layout."""

    kind: ConstraintKind
    value: int
    denominator: int = 1

    @classmethod
    def percentage(cls, value: int) -> Constraint:
        return cls(ConstraintKind.PERCENTAGE, value)

    @classmethod
    def ratio(cls, numerator: int, denominator: int) -> Constraint:
        return cls(ConstraintKind.RATIO, numerator, denominator)

    @classmethod
    def length(cls, value: int) -> Constraint:
        return cls(ConstraintKind.LENGTH, value)

    @classmethod
    def maximum(cls, value: int) -> Constraint:
        return cls(ConstraintKind.MAX, value)

    @classmethod
    def minimum(cls, value: int) -> Constraint:
        return cls(ConstraintKind.MIN, value)

    def apply(self, length: int) -> int:
        """The size this constraint gives when applied to ``length``."""
        if self.kind is ConstraintKind.PERCENTAGE:
            return length * self.value // 100
        if self.kind is ConstraintKind.RATIO:
            return (self.value * length // self.denominator) % (_U16_MAX + 1)
        if self.kind in (ConstraintKind.LENGTH, ConstraintKind.MAX):
            return min(length, self.value)
        return max(length, self.value)


@dataclass(frozen=True)
class Margin:
    vertical: int = 0
    horizontal: int = 0


@dataclass(frozen=True)
class Rect:
    """An area of the screen."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def clipped(cls, x: int, y: int, width: int, height: int) -> Rect:
        """A rect whose area is kept within 65535 cells, preserving the aspect ratio."""
        if width * height > _U16_MAX:
            aspect_ratio = width / height
            height_f = math.sqrt(_U16_MAX / aspect_ratio)
            width_f = height_f * aspect_ratio
            width, height = _to_u16(width_f), _to_u16(height_f)
        return cls(x, y, width, height)

    def area(self) -> int:
        return self.width * self.height

    def left(self) -> int:
        return self.x

    def right(self) -> int:
        return min(self.x + self.width, _U16_MAX)

    def top(self) -> int:
        return self.y

    def bottom(self) -> int:
        return min(self.y + self.height, _U16_MAX)

    def inner(self, margin: Margin) -> Rect:
        """The rect shrunk by ``margin`` on every side, or an empty rect if it does not fit."""
        if self.width < 2 * margin.horizontal or self.height < 2 * margin.vertical:
            return Rect()
        return Rect(
            self.x + margin.horizontal,
            self.y + margin.vertical,
            self.width - 2 * margin.horizontal,
            self.height - 2 * margin.vertical,
        )

    def union(self, other: Rect) -> Rect:
        x1 = min(self.x, other.x)
        y1 = min(self.y, other.y)
        x2 = max(self.x + self.width, other.x + other.width)
        y2 = max(self.y + self.height, other.y + other.height)
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def intersection(self, other: Rect) -> Rect:
        """The overlapping area; width or height is zero when the rects do not overlap."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.x + self.width, other.x + other.width)
        y2 = min(self.y + self.height, other.y + other.height)
        return Rect(x1, y1, max(x2 - x1, 0), max(y2 - y1, 0))

    def intersects(self, other: Rect) -> bool:
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )


@dataclass(frozen=True)
class Layout:
    """Splits an area into chunks along one direction according to constraints."""

    direction: Direction = Direction.VERTICAL
    margin: Margin = field(default_factory=Margin)
    constraints: tuple[Constraint, ...] = ()
    expand_to_fill: bool = True

    def with_constraints(self, constraints: Iterable[Constraint]) -> Layout:
        return replace(self, constraints=tuple(constraints))

    def with_margin(self, margin: int) -> Layout:
        return replace(self, margin=Margin(vertical=margin, horizontal=margin))

    def with_horizontal_margin(self, horizontal: int) -> Layout:
        return replace(self, margin=replace(self.margin, horizontal=horizontal))

    def with_vertical_margin(self, vertical: int) -> Layout:
        return replace(self, margin=replace(self.margin, vertical=vertical))

    def with_direction(self, direction: Direction) -> Layout:
        return replace(self, direction=direction)

    def with_expand_to_fill(self, expand_to_fill: bool) -> Layout:
        """Whether the last chunk is stretched to fill the remaining space."""
        return replace(self, expand_to_fill=expand_to_fill)

    def split(self, area: Rect) -> tuple[Rect, ...]:
        """Split ``area`` into one rect per constraint; results are cached."""
        return _split(area, self)


def _to_u16(value: float) -> int:
    if value < 0 or math.copysign(1.0, value) < 0:
        return 0
    nearest = round(value)
    if abs(value - nearest) < 1e-6:
        value = nearest
    return min(int(value), _U16_MAX)


class _Program:
    """A weighted linear program: hard constraints plus penalised soft ones."""

    def __init__(self) -> None:
        self.costs: list[float] = []
        self.bounds: list[tuple[Optional[float], Optional[float]]] = []
        self.eq: list[tuple[dict[int, float], float]] = []
        self.ub: list[tuple[dict[int, float], float]] = []

    def variable(self, lower: Optional[float] = 0.0, cost: float = 0.0) -> int:
        self.costs.append(cost)
        self.bounds.append((lower, None))
        return len(self.costs) - 1

    def require(self, terms: dict[int, float], relation: str, target: float) -> None:
        if relation == "==":
            self.eq.append((terms, target))
        elif relation == "<=":
            self.ub.append((terms, target))
        else:
            self.ub.append(({var: -coef for var, coef in terms.items()}, -target))

    def prefer(self, terms: dict[int, float], relation: str, target: float, weight: float) -> None:
        if relation == "==":
            over = self.variable(cost=weight)
            under = self.variable(cost=weight)
            self.require({**terms, over: -1.0, under: 1.0}, "==", target)
        elif relation == ">=":
            under = self.variable(cost=weight)
            self.require({**terms, under: 1.0}, ">=", target)
        else:
            over = self.variable(cost=weight)
            self.require({**terms, over: -1.0}, "<=", target)

    def _dense(self, rows: list[tuple[dict[int, float], float]]):
        if not rows:
            return None, None
        width = len(self.costs)
        matrix = []
        for terms, _ in rows:
            row = [0.0] * width
            for var, coef in terms.items():
                row[var] += coef
            matrix.append(row)
        return matrix, [target for _, target in rows]

    def solve(self) -> list[float]:
        a_ub, b_ub = self._dense(self.ub)
        a_eq, b_eq = self._dense(self.eq)
        result = linprog(
            self.costs,
            A_ub=a_ub,
            b_ub=b_ub,
            A_eq=a_eq,
            b_eq=b_eq,
            bounds=self.bounds,
            method="highs",
        )
        if result.status != 0:
            raise ValueError(f"layout constraints cannot be satisfied: {result.message}")
        return list(result.x)


@lru_cache(maxsize=None)
def _split(area: Rect, layout: Layout) -> tuple[Rect, ...]:
    count = len(layout.constraints)
    if count == 0:
        return ()

    dest = area.inner(layout.margin)
    horizontal = layout.direction is Direction.HORIZONTAL
    start = dest.left() if horizontal else dest.top()
    end = dest.right() if horizontal else dest.bottom()
    extent = dest.width if horizontal else dest.height

    program = _Program()
    positions = [program.variable(lower=float(start)) for _ in range(count)]
    sizes = [program.variable() for _ in range(count)]

    for pos, size in zip(positions, sizes):
        program.require({pos: 1.0, size: 1.0}, "<=", float(end))
    program.require({positions[0]: 1.0}, "==", float(start))
    if layout.expand_to_fill:
        program.require({positions[-1]: 1.0, sizes[-1]: 1.0}, "==", float(end))
    for pos, size, next_pos in zip(positions, sizes, positions[1:]):
        program.require({pos: 1.0, size: 1.0, next_pos: -1.0}, "==", 0.0)

    for size, constraint in zip(sizes, layout.constraints):
        terms = {size: 1.0}
        kind = constraint.kind
        if kind is ConstraintKind.LENGTH:
            program.prefer(terms, "==", float(constraint.value), _MEDIUM)
        elif kind is ConstraintKind.PERCENTAGE:
            program.prefer(terms, "==", constraint.value * extent / 100.0, _MEDIUM)
        elif kind is ConstraintKind.RATIO:
            target = extent * constraint.value / constraint.denominator
            program.prefer(terms, "==", target, _MEDIUM)
        elif kind is ConstraintKind.MIN:
            program.prefer(terms, ">=", float(constraint.value), _MEDIUM)
            program.prefer(terms, "==", float(constraint.value), _WEAK)
        else:
            program.prefer(terms, "<=", float(constraint.value), _MEDIUM)
            program.prefer(terms, "==", float(constraint.value), _WEAK)

    solution = program.solve()
    spans = [(_to_u16(solution[pos]), _to_u16(solution[size])) for pos, size in zip(positions, sizes)]

    if layout.expand_to_fill:
        last_pos, _ = spans[-1]
        spans[-1] = (last_pos, end - last_pos)

    if horizontal:
        return tuple(Rect(pos, dest.y, size, dest.height) for pos, size in spans)
    return tuple(Rect(dest.x, pos, dest.width, size) for pos, size in spans)