"""A grid of styled cells describing the desired content of the terminal."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Iterable

import regex
from wcwidth import wcwidth

from tuihist.layout import Rect
from tuihist.style import NO_MODIFIER, Color, Modifier, Style

_GRAPHEME = regex.compile(r"\X")


def str_width(text: str) -> int:
    """The number of terminal columns ``text`` occupies; control characters count as zero."""
    return sum(max(wcwidth(c), 0) for c in text)


@dataclass
class Cell:
    """One grid position: a grapheme with its colours and modifiers."""

    symbol: str = " "
    fg: Color = Color.RESET
    bg: Color = Color.RESET
    modifier: Modifier = NO_MODIFIER

    def set_symbol(self, symbol: str) -> Cell:
        self.symbol = symbol
        return self

    def set_char(self, ch: str) -> Cell:
        if len(ch) != 1:
            raise ValueError("set_char takes exactly one character")
        self.symbol = ch
        return self

    def set_fg(self, color: Color) -> Cell:
        self.fg = color
        return self

    def set_bg(self, color: Color) -> Cell:
        self.bg = color
        return self

    def set_style(self, style: Style) -> Cell:
        """Apply an incremental style to this cell."""
        if style.fg is not None:
            self.fg = style.fg
        if style.bg is not None:
            self.bg = style.bg
        self.modifier = Modifier(
            (int(self.modifier) | int(style.add_modifier)) & ~int(style.sub_modifier)
        )
        return self

    def style(self) -> Style:
        """The style that reproduces this cell's attributes."""
        return Style().with_fg(self.fg).with_bg(self.bg).with_modifier(self.modifier)

    def reset(self) -> None:
        self.symbol = " "
        self.fg = Color.RESET
        self.bg = Color.RESET
        self.modifier = NO_MODIFIER


@dataclass
class Buffer:
    """Cells covering ``area``, stored row by row."""

    area: Rect = field(default_factory=Rect)
    content: list[Cell] = field(default_factory=list)

    @classmethod
    def empty(cls, area: Rect) -> Buffer:
        """A buffer of default cells."""
        return cls.filled(area, Cell())

    @classmethod
    def filled(cls, area: Rect, cell: Cell) -> Buffer:
        """A buffer whose every cell is a copy of ``cell``."""
        return cls(area, [replace(cell) for _ in range(area.area())])

    @classmethod
    def with_lines(cls, lines: Iterable[str]) -> Buffer:
        """A buffer at the origin holding the given lines."""
        lines = list(lines)
        width = max((str_width(line) for line in lines), default=0)
        buffer = cls.empty(Rect(0, 0, width, len(lines)))
        for y, line in enumerate(lines):
            buffer.set_string(0, y, line, Style())
        return buffer

    def get(self, x: int, y: int) -> Cell:
        """The cell at global coordinates (x, y)."""
        return self.content[self.index_of(x, y)]

    def index_of(self, x: int, y: int) -> int:
        """The position in ``content`` of global coordinates (x, y)."""
        area = self.area
        if not (area.left() <= x < area.right() and area.top() <= y < area.bottom()):
            raise IndexError(
                f"Trying to access position outside the buffer: x={x}, y={y}, area={area}"
            )
        return (y - area.y) * area.width + (x - area.x)

    def pos_of(self, i: int) -> tuple[int, int]:
        """The global coordinates of the cell at index ``i``."""
        if not 0 <= i < len(self.content):
            raise IndexError(
                "Trying to get the coords of a cell outside the buffer: "
                f"i={i} len={len(self.content)}"
            )
        return self.area.x + i % self.area.width, self.area.y + i // self.area.width

    def set_string(self, x: int, y: int, string: str, style: Style) -> None:
        """Print a string starting at (x, y), clipped at the end of the line."""
        self.set_stringn(x, y, string, sys.maxsize, style)

    def set_stringn(
        self, x: int, y: int, string: str, width: int, style: Style
    ) -> tuple[int, int]:
        """Print at most ``width`` columns of a string; return the position after it."""
        index = self.index_of(x, y)
        x_offset = x
        max_offset = min(self.area.right(), width + x)
        for grapheme in _GRAPHEME.findall(string):
            grapheme_width = str_width(grapheme)
            if grapheme_width == 0:
                continue
            if grapheme_width > max(max_offset - x_offset, 0):
                break
            self.content[index].set_symbol(grapheme).set_style(style)
            # Cells hidden behind a wide grapheme are blanked.
            for hidden in self.content[index + 1 : index + grapheme_width]:
                hidden.reset()
            index += grapheme_width
            x_offset += grapheme_width
        return x_offset, y

    def set_style(self, area: Rect, style: Style) -> None:
        for y in range(area.top(), area.bottom()):
            for x in range(area.left(), area.right()):
                self.get(x, y).set_style(style)

    def resize(self, area: Rect) -> None:
        """Make the buffer cover ``area``, truncating or padding with default cells."""
        length = area.area()
        if len(self.content) > length:
            del self.content[length:]
        else:
            self.content.extend(Cell() for _ in range(length - len(self.content)))
        self.area = area

    def reset(self) -> None:
        for cell in self.content:
            cell.reset()

    def merge(self, other: Buffer) -> None:
        """Grow to the union of both areas and copy ``other`` on top of this buffer."""
        area = self.area.union(other.area)
        merged = [Cell() for _ in range(area.area())]
        for source in (self, other):
            for i, cell in enumerate(source.content[: source.area.area()]):
                x, y = source.pos_of(i)
                merged[(y - area.y) * area.width + (x - area.x)] = replace(cell)
        self.content = merged
        self.area = area

    def diff(self, other: Buffer) -> list[tuple[int, int, Cell]]:
        """The (x, y, cell) updates needed to turn this buffer into ``other``.

        Buffers are assumed well formed: a wide cell is followed by blank cells.
        """
        updates: list[tuple[int, int, Cell]] = []
        invalidated = 0
        to_skip = 0
        for i, (current, previous) in enumerate(zip(other.content, self.content)):
            if (current != previous or invalidated > 0) and to_skip == 0:
                x, y = self.pos_of(i)
                updates.append((x, y, current))
            current_width = str_width(current.symbol)
            to_skip = max(current_width - 1, 0)
            affected_width = max(current_width, str_width(previous.symbol))
            invalidated = max(max(affected_width, invalidated) - 1, 0)
        return updates