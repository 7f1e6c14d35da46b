"""An editable line of text with a cursor and word-wise movement."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional


class WordJumpMode(enum.Enum):
    """How word boundaries are found when jumping between words."""

    EMACS = "emacs"
    SUBL = "subl"


def _first(indices: Iterable[int], predicate) -> Optional[int]:
    return next((i for i in indices if predicate(i)), None)


@dataclass(frozen=True)
class WordJumper:
    """Finds the next and previous word positions in a string."""

    word_chars: str
    mode: WordJumpMode

    def _is_word_char(self, c: str) -> bool:
        return c in self.word_chars

    def _is_boundary(self, c: str, next_c: str) -> bool:
        return c.isspace() != next_c.isspace() or self._is_word_char(c) != self._is_word_char(
            next_c
        )

    def next_word_pos(self, source: str, index: int) -> int:
        if self.mode is WordJumpMode.EMACS:
            return self._emacs_next(source, index)
        return self._subl_next(source, index)

    def prev_word_pos(self, source: str, index: int) -> int:
        if self.mode is WordJumpMode.EMACS:
            return self._emacs_prev(source, index)
        return self._subl_prev(source, index)

    def _emacs_next(self, source: str, index: int) -> int:
        stop = max(len(source) - 1, 0)
        start = _first(range(index + 1, stop), lambda i: self._is_word_char(source[i]))
        if start is None:
            start = len(source)
        end = _first(range(start + 1, stop), lambda i: not self._is_word_char(source[i]))
        return len(source) if end is None else end

    def _emacs_prev(self, source: str, index: int) -> int:
        start = _first(reversed(range(1, index)), lambda i: self._is_word_char(source[i]))
        if start is None:
            start = 0
        end = _first(reversed(range(1, start)), lambda i: not self._is_word_char(source[i]))
        return 0 if end is None else end + 1

    def _subl_next(self, source: str, index: int) -> int:
        boundary = _first(
            range(index, max(len(source) - 1, 0)),
            lambda i: self._is_boundary(source[i], source[i + 1]),
        )
        if boundary is None:
            return len(source)
        end = _first(range(boundary + 1, len(source)), lambda i: not source[i].isspace())
        return len(source) if end is None else end

    def _subl_prev(self, source: str, index: int) -> int:
        last = _first(reversed(range(1, index)), lambda i: not source[i].isspace())
        if last is None:
            return 0
        start = _first(
            reversed(range(1, last)),
            lambda i: self._is_boundary(source[i - 1], source[i]),
        )
        return 0 if start is None else start


class Cursor:
    """A string with an insertion point, counted in characters."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.index = 0

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Cursor(text={self.text!r}, index={self.index})"

    @property
    def byte_index(self) -> int:
        """The cursor position as an offset into the UTF-8 encoding."""
        return len(self.text[: self.index].encode("utf-8"))

    def substring(self) -> str:
        """The text before the cursor."""
        return self.text[: self.index]

    def char(self) -> Optional[str]:
        """The character under the cursor, or None at the end."""
        return self.text[self.index] if self.index < len(self.text) else None

    def right(self) -> None:
        if self.index < len(self.text):
            self.index += 1

    def left(self) -> bool:
        """Move one character left; return whether the cursor moved."""
        if self.index > 0:
            self.index -= 1
            return True
        return False

    def next_word(self, word_chars: str, word_jump_mode: WordJumpMode) -> None:
        self.index = WordJumper(word_chars, word_jump_mode).next_word_pos(self.text, self.index)

    def prev_word(self, word_chars: str, word_jump_mode: WordJumpMode) -> None:
        self.index = WordJumper(word_chars, word_jump_mode).prev_word_pos(self.text, self.index)

    def insert(self, c: str) -> None:
        """Insert one character before the cursor and move past it."""
        if len(c) != 1:
            raise ValueError("insert takes exactly one character")
        self.text = self.text[: self.index] + c + self.text[self.index :]
        self.index += 1

    def remove(self) -> Optional[str]:
        """Delete and return the character under the cursor."""
        c = self.char()
        if c is not None:
            self.text = self.text[: self.index] + self.text[self.index + 1 :]
        return c

    def remove_next_word(self, word_chars: str, word_jump_mode: WordJumpMode) -> None:
        end = WordJumper(word_chars, word_jump_mode).next_word_pos(self.text, self.index)
        self.text = self.text[: self.index] + self.text[end:]

    def remove_prev_word(self, word_chars: str, word_jump_mode: WordJumpMode) -> None:
        start = WordJumper(word_chars, word_jump_mode).prev_word_pos(self.text, self.index)
        self.text = self.text[:start] + self.text[self.index :]
        self.index = start

    def back(self) -> Optional[str]:
        """Delete and return the character before the cursor."""
        return self.remove() if self.left() else None

    def clear(self) -> None:
        self.text = ""
        self.index = 0

    def end(self) -> None:
        self.index = len(self.text)

    def start(self) -> None:
        self.index = 0