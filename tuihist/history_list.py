"""The scrolling list of history entries shown by the interactive search."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from tuihist.buffer import Buffer
from tuihist.duration import format_duration
from tuihist.history import History
from tuihist.layout import Rect
from tuihist.style import Color, Modifier, Style

# The longest line prefix an entry can have.
PREFIX_LENGTH = len(" > 123ms 59s ago")

# " > ", " n " or "   ", each three characters at an even offset.
_SLICES = " > 1 2 3 4 5 6 7 8 9   "

_ASCII_WHITESPACE = re.compile(r"[ \t\n\x0c\r]+")


@dataclass
class ListState:
    """Scroll position and selection of a history list."""

    offset: int = 0
    selected: int = 0
    max_entries: int = 0

    def select(self, index: int) -> None:
        self.selected = index


def _since(timestamp: datetime, now: Optional[datetime]) -> timedelta:
    if now is None:
        now = datetime.now(timezone.utc)
        if timestamp.tzinfo is None:
            now = now.replace(tzinfo=None)
    return max(now - timestamp, timedelta(0))


class _DrawState:
    def __init__(self, buf: Buffer, area: Rect, state: ListState) -> None:
        self.buf = buf
        self.area = area
        self.state = state
        self.x = 0
        self.y = 0

    def index(self) -> None:
        i = self.y + self.state.offset - self.state.selected
        i = (10 if i < 0 else min(i, 10)) * 2
        self.draw(_SLICES[i : i + 3], Style())

    def duration(self, entry: History) -> None:
        status = Style().with_fg(Color.GREEN if entry.success() else Color.RED)
        nanos = max(entry.duration, 0)
        self.draw(format_duration(timedelta(microseconds=nanos // 1000)), status)

    def time(self, entry: History, now: Optional[datetime]) -> None:
        style = Style().with_fg(Color.BLUE)
        time = format_duration(_since(entry.timestamp, now))
        # Pad so that the "ago" columns line up.
        self.x = PREFIX_LENGTH - 4 - len(time)
        self.draw(time, style)
        self.draw(" ago", style)

    def command(self, entry: History) -> None:
        style = Style()
        if self.y + self.state.offset == self.state.selected:
            style = style.with_fg(Color.RED).with_modifier(Modifier.BOLD)
        for section in filter(None, _ASCII_WHITESPACE.split(entry.command)):
            self.x += 1
            if self.x > self.area.width:
                return
            self.draw(section, style)

    def draw(self, text: str, style: Style) -> None:
        if self.x >= self.area.width:
            return
        cx = self.area.left() + self.x
        cy = self.area.bottom() - self.y - 1
        width = self.area.width - self.x
        end_x, _ = self.buf.set_stringn(cx, cy, text, width, style)
        self.x += end_x - cx


@dataclass
class HistoryList:
    """Renders entries bottom-up, the first entry on the last line of the area."""

    history: Sequence[History]
    now: Optional[datetime] = None

    def items_bounds(self, selected: int, offset: int, height: int) -> tuple[int, int]:
        """The start and end indices of the visible entries."""
        offset = min(offset, max(len(self.history) - 1, 0))
        max_scroll_space = min(height, 10)
        if offset + height < selected + max_scroll_space:
            end = selected + max_scroll_space
            return end - height, end
        if selected < offset:
            return selected, selected + height
        return offset, offset + height

    def render(self, area: Rect, buf: Buffer, state: ListState) -> None:
        if area.width < 1 or area.height < 1 or not self.history:
            return
        start, end = self.items_bounds(state.selected, state.offset, area.height)
        state.offset = start
        state.max_entries = end - start

        draw = _DrawState(buf, area, state)
        for entry in self.history[start:end]:
            draw.index()
            draw.duration(entry)
            draw.time(entry, self.now)
            draw.command(entry)
            draw.y += 1
            draw.x = 0