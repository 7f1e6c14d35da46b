"""Statistics on the most used commands in a history."""

from __future__ import annotations

import sys
from collections import Counter
from typing import Optional, Sequence, TextIO

from tuihist.history import History

COMMON_COMMAND_PREFIX = ("sudo",)
COMMON_SUBCOMMAND_PREFIX = ("cargo", "go", "git", "npm", "yarn", "pnpm")

_ASCII_WHITESPACE = " \t\n\x0c\r"

_RED = "\x1b[38;5;9m"
_YELLOW = "\x1b[38;5;11m"
_GREEN = "\x1b[38;5;10m"
_GRAY = "\x1b[38;5;7m"
_BOLD = "\x1b[1m"
_RESET = "\x1b[0m"


def _first_non_whitespace(s: str) -> Optional[int]:
    return next((i for i, c in enumerate(s) if c not in _ASCII_WHITESPACE), None)


def _first_whitespace(s: str) -> int:
    return next((i for i, c in enumerate(s) if c in _ASCII_WHITESPACE), len(s))


def interesting_command(command: str) -> str:
    """The part of a command worth counting: the program, plus a subcommand for some tools."""
    while True:
        i = _first_whitespace(command)
        prefix = command[:i]
        if prefix not in COMMON_COMMAND_PREFIX:
            break
        command = command[i:].lstrip()
        if not command:
            return prefix

    j = _first_non_whitespace(command[i:])
    if j is not None and prefix in COMMON_SUBCOMMAND_PREFIX:
        end = i + j + _first_whitespace(command[i + j :])
        return command[:end]
    return prefix


def compute_stats(history: Sequence[History], count: int, out: Optional[TextIO] = None) -> None:
    """Print the ``count`` most used commands with bars, then totals."""
    out = sys.stdout if out is None else out
    commands = {h.command.strip() for h in history}
    prefixes = Counter(interesting_command(h.command.strip()) for h in history)

    top = sorted(prefixes.items(), key=lambda item: item[1], reverse=True)[:count]
    if not top:
        raise ValueError("No commands found")

    most = max(n for _, n in top)
    num_pad = len(str(most))

    for command, n in top:
        in_ten = 10 * n // most
        bar = [_RED]
        for i in range(in_ten):
            if i == 2:
                bar.append(_YELLOW)
            if i == 5:
                bar.append(_GREEN)
            bar.append("▮")
        bar.append(" " * (10 - in_ten))
        out.write(
            f"[{''.join(bar)}{_RESET}] {_GRAY}{n:>{num_pad}}{_RESET} "
            f"{_BOLD}{command}{_RESET}\n"
        )
    out.write(f"Total commands:   {len(history)}\n")
    out.write(f"Unique commands:  {len(commands)}\n")