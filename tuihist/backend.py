"""A terminal backend that turns cell updates into ANSI escape sequences."""

from __future__ import annotations

import enum
import os
import re
import shutil
import sys
from typing import Iterable, Optional, TextIO

from tuihist.buffer import Cell
from tuihist.layout import Rect
from tuihist.style import NO_MODIFIER, Color, Modifier

_CSI = "\x1b["

_NAMED_COLORS = {
    "black": "5;0",
    "red": "5;1",
    "green": "5;2",
    "yellow": "5;3",
    "blue": "5;4",
    "magenta": "5;5",
    "cyan": "5;6",
    "gray": "5;7",
    "dark_gray": "5;8",
    "light_red": "5;9",
    "light_green": "5;10",
    "light_yellow": "5;11",
    "light_blue": "5;12",
    "light_magenta": "5;13",
    "light_cyan": "5;14",
    "white": "5;15",
}

_CURSOR_REPORT = re.compile(r"\x1b\[(\d+);(\d+)R")


class ClearType(enum.Enum):
    """Which part of the screen to clear."""

    ALL = "all"
    AFTER_CURSOR = "after_cursor"
    BEFORE_CURSOR = "before_cursor"
    CURRENT_LINE = "current_line"
    UNTIL_NEW_LINE = "until_new_line"


_CLEAR_SEQUENCES = {
    ClearType.ALL: _CSI + "2J",
    ClearType.AFTER_CURSOR: _CSI + "J",
    ClearType.BEFORE_CURSOR: _CSI + "1J",
    ClearType.CURRENT_LINE: _CSI + "2K",
    ClearType.UNTIL_NEW_LINE: _CSI + "K",
}


def _sgr(code: int | str) -> str:
    return f"{_CSI}{code}m"


def _move_to(x: int, y: int) -> str:
    return f"{_CSI}{y + 1};{x + 1}H"


def _color(color: Color, base: int) -> str:
    if color.name == "reset":
        return _sgr(base + 9)
    if color.name == "rgb":
        r, g, b = color.value
        return _sgr(f"{base + 8};2;{r};{g};{b}")
    if color.name == "indexed":
        return _sgr(f"{base + 8};5;{color.value[0]}")
    return _sgr(f"{base + 8};{_NAMED_COLORS[color.name]}")


def _modifier_diff(old: Modifier, new: Modifier) -> str:
    removed = Modifier(int(old) & ~int(new))
    added = Modifier(int(new) & ~int(old))
    codes: list[int] = []

    if Modifier.REVERSED in removed:
        codes.append(27)
    if Modifier.BOLD in removed:
        codes.append(22)
        if Modifier.DIM in new:
            codes.append(2)
    if Modifier.ITALIC in removed:
        codes.append(23)
    if Modifier.UNDERLINED in removed:
        codes.append(24)
    if Modifier.DIM in removed:
        codes.append(22)
    if Modifier.CROSSED_OUT in removed:
        codes.append(29)
    if Modifier.SLOW_BLINK in removed or Modifier.RAPID_BLINK in removed:
        codes.append(25)

    for flag, code in (
        (Modifier.REVERSED, 7),
        (Modifier.BOLD, 1),
        (Modifier.ITALIC, 3),
        (Modifier.UNDERLINED, 4),
        (Modifier.DIM, 2),
        (Modifier.CROSSED_OUT, 9),
        (Modifier.SLOW_BLINK, 5),
        (Modifier.RAPID_BLINK, 6),
    ):
        if flag in added:
            codes.append(code)

    return "".join(_sgr(code) for code in codes)


class CrosstermBackend:
    """Writes escape sequences to ``stream``; cursor reports are read from ``reader``."""

    def __init__(self, stream: TextIO, reader: Optional[TextIO] = None) -> None:
        self.stream = stream
        self.reader = reader

    def draw(self, content: Iterable[tuple[int, int, Cell]]) -> None:
        """Queue the given cell updates, then reset colours and attributes."""
        parts: list[str] = []
        fg = Color.RESET
        bg = Color.RESET
        modifier = NO_MODIFIER
        last_pos: Optional[tuple[int, int]] = None
        for x, y, cell in content:
            if last_pos is None or not (x == last_pos[0] + 1 and y == last_pos[1]):
                parts.append(_move_to(x, y))
            last_pos = (x, y)
            if cell.modifier != modifier:
                parts.append(_modifier_diff(modifier, cell.modifier))
                modifier = cell.modifier
            if cell.fg != fg:
                parts.append(_color(cell.fg, 30))
                fg = cell.fg
            if cell.bg != bg:
                parts.append(_color(cell.bg, 40))
                bg = cell.bg
            parts.append(cell.symbol)
        parts.append(_color(Color.RESET, 30))
        parts.append(_color(Color.RESET, 40))
        parts.append(_sgr(0))
        self.stream.write("".join(parts))

    def _execute(self, sequence: str) -> None:
        self.stream.write(sequence)
        self.stream.flush()

    def hide_cursor(self) -> None:
        self._execute(_CSI + "?25l")

    def show_cursor(self) -> None:
        self._execute(_CSI + "?25h")

    def get_cursor(self) -> tuple[int, int]:
        """Ask the terminal for the cursor position; return it 0-based as (x, y)."""
        self._execute(_CSI + "6n")
        reader = self.reader if self.reader is not None else sys.stdin
        response: list[str] = []
        while True:
            c = reader.read(1)
            if not c:
                raise OSError("no cursor position report from the terminal")
            response.append(c)
            if c == "R":
                break
        match = _CURSOR_REPORT.search("".join(response))
        if match is None:
            raise OSError(f"malformed cursor position report: {''.join(response)!r}")
        row, col = int(match.group(1)), int(match.group(2))
        return col - 1, row - 1

    def set_cursor(self, x: int, y: int) -> None:
        self._execute(_move_to(x, y))

    def clear(self) -> None:
        self.clear_region(ClearType.ALL)

    def clear_region(self, clear_type: ClearType) -> None:
        self._execute(_CLEAR_SEQUENCES[clear_type])

    def append_lines(self, n: int) -> None:
        """Insert ``n`` line breaks."""
        self.stream.write("\n" * n)
        self.stream.flush()

    def size(self) -> Rect:
        """The terminal size as a rect at the origin."""
        try:
            columns, lines = os.get_terminal_size(self.stream.fileno())
        except (AttributeError, OSError, ValueError):
            columns, lines = shutil.get_terminal_size()
        return Rect.clipped(0, 0, columns, lines)

    def flush(self) -> None:
        self.stream.flush()