"""Colours, text modifiers and incremental styles for terminal cells."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from functools import reduce
from operator import or_
from typing import ClassVar, Optional


@dataclass(frozen=True)
class Color:
    """A terminal colour: a named colour, an RGB triple or a palette index."""

    name: str
    value: tuple[int, ...] = ()

    RESET: ClassVar[Color]
    BLACK: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    YELLOW: ClassVar[Color]
    BLUE: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    CYAN: ClassVar[Color]
    GRAY: ClassVar[Color]
    DARK_GRAY: ClassVar[Color]
    LIGHT_RED: ClassVar[Color]
    LIGHT_GREEN: ClassVar[Color]
    LIGHT_YELLOW: ClassVar[Color]
    LIGHT_BLUE: ClassVar[Color]
    LIGHT_MAGENTA: ClassVar[Color]
    LIGHT_CYAN: ClassVar[Color]
    WHITE: ClassVar[Color]

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> Color:
        """A true-colour value; each component must fit in a byte."""
        for component in (r, g, b):
            _check_byte(component)
        return cls("rgb", (r, g, b))

    @classmethod
    def indexed(cls, index: int) -> Color:
        """A colour from the 256-entry terminal palette."""
        _check_byte(index)
        return cls("indexed", (index,))


def _check_byte(value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"colour component out of range: {value}")


Color.RESET = Color("reset")
Color.BLACK = Color("black")
Color.RED = Color("red")
Color.GREEN = Color("green")
Color.YELLOW = Color("yellow")
Color.BLUE = Color("blue")
Color.MAGENTA = Color("magenta")
Color.CYAN = Color("cyan")
Color.GRAY = Color("gray")
Color.DARK_GRAY = Color("dark_gray")
Color.LIGHT_RED = Color("light_red")
Color.LIGHT_GREEN = Color("light_green")
Color.LIGHT_YELLOW = Color("light_yellow")
Color.LIGHT_BLUE = Color("light_blue")
Color.LIGHT_MAGENTA = Color("light_magenta")
Color.LIGHT_CYAN = Color("light_cyan")
Color.WHITE = Color("white")


class Modifier(enum.IntFlag):
    """Text emphasis flags; combine them with ``|``."""

    BOLD = 0b0000_0000_0001
    DIM = 0b0000_0000_0010
    ITALIC = 0b0000_0000_0100
    UNDERLINED = 0b0000_0000_1000
    SLOW_BLINK = 0b0000_0001_0000
    RAPID_BLINK = 0b0000_0010_0000
    REVERSED = 0b0000_0100_0000
    HIDDEN = 0b0000_1000_0000
    CROSSED_OUT = 0b0001_0000_0000


NO_MODIFIER = Modifier(0)
ALL_MODIFIERS = reduce(or_, Modifier, NO_MODIFIER)


def _without(flags: Modifier, removed: Modifier) -> Modifier:
    return Modifier(int(flags) & ~int(removed))


@dataclass(frozen=True)
class Style:
    """An incremental change to a cell's colours and modifiers."""

    fg: Optional[Color] = None
    bg: Optional[Color] = None
    add_modifier: Modifier = NO_MODIFIER
    sub_modifier: Modifier = NO_MODIFIER

    @classmethod
    def reset(cls) -> Style:
        """A style that resets every property."""
        return cls(Color.RESET, Color.RESET, NO_MODIFIER, ALL_MODIFIERS)

    def with_fg(self, color: Color) -> Style:
        return replace(self, fg=color)

    def with_bg(self, color: Color) -> Style:
        return replace(self, bg=color)

    def with_modifier(self, modifier: Modifier) -> Style:
        """Add the given modifiers."""
        return replace(
            self,
            add_modifier=self.add_modifier | modifier,
            sub_modifier=_without(self.sub_modifier, modifier),
        )

    def without_modifier(self, modifier: Modifier) -> Style:
        """Remove the given modifiers."""
        return replace(
            self,
            add_modifier=_without(self.add_modifier, modifier),
            sub_modifier=self.sub_modifier | modifier,
        )

    def patch(self, other: Style) -> Style:
        """The style equal to applying ``self`` and then ``other``."""
        return Style(
            fg=other.fg if other.fg is not None else self.fg,
            bg=other.bg if other.bg is not None else self.bg,
            add_modifier=_without(self.add_modifier, other.sub_modifier) | other.add_modifier,
            sub_modifier=_without(self.sub_modifier, other.add_modifier) | other.sub_modifier,
        )