"""Fuzzy matching of history commands, ranked by match, frequency, age and directory."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Iterable, Optional, Union

from tuihist.history import History

_LIMIT = 200

_SCORE_MATCH = 16
_GAP_START = -3
_GAP_EXTENSION = -1
_FIRST_CHAR_MULTIPLIER = 2
_BONUS_HEAD = _SCORE_MATCH // 2
_BONUS_BREAK = _SCORE_MATCH // 2 + _GAP_EXTENSION
_BONUS_CAMEL = _SCORE_MATCH // 2 + 2 * _GAP_EXTENSION
_BONUS_CONSECUTIVE = -(_GAP_START + _GAP_EXTENSION)
_PENALTY_CASE_MISMATCH = _GAP_EXTENSION * 2

_IMPOSSIBLE = float("-inf")


class FilterMode(enum.Enum):
    GLOBAL = "global"
    HOST = "host"
    SESSION = "session"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Context:
    """Where a search runs from."""

    session: str = ""
    cwd: str = ""
    hostname: str = ""


def path_dist(a: Union[str, PurePath], b: Union[str, PurePath]) -> int:
    """Steps from ``a`` up to the common ancestor and down to ``b``."""
    a_parts = list(PurePath(a).parts)
    b_parts = list(PurePath(b).parts)
    dist = 0
    while b_parts[: len(a_parts)] != a_parts:
        dist += 1
        a_parts.pop()
    return len(b_parts) - len(a_parts) + dist


def _kind(c: Optional[str]) -> str:
    if c is None or c.isspace():
        return "space"
    if c.isupper():
        return "upper"
    if c.isdigit():
        return "number"
    if c.isalpha():
        return "lower"
    return "delimiter"


def _bonus(prev: Optional[str], cur: str) -> int:
    prev_kind, cur_kind = _kind(prev), _kind(cur)
    if cur_kind == "space":
        return 0
    if prev_kind == "space":
        return _BONUS_HEAD
    if prev_kind == "delimiter" and cur_kind != "delimiter":
        return _BONUS_BREAK
    if (prev_kind == "lower" and cur_kind == "upper") or (
        prev_kind != "number" and cur_kind == "number"
    ):
        return _BONUS_CAMEL
    return 0


def fuzzy_indices(choice: str, pattern: str) -> Optional[tuple[int, list[int]]]:
    """Score ``pattern`` as a fuzzy subsequence of ``choice``.

    Returns the score and the matched character positions, or None when it does
    not match. Matching ignores case unless the pattern has an upper-case letter.
    """
    if not pattern:
        return 0, []
    case_sensitive = any(c.isupper() for c in pattern)

    def fold(c: str) -> str:
        return c if case_sensitive else c.lower()

    chars = list(choice)
    folded = [fold(c) for c in chars]
    wanted = [fold(c) for c in pattern]
    remaining = iter(folded)
    if not all(p in remaining for p in wanted):
        return None

    bonuses = [_bonus(prev, cur) for prev, cur in zip([None, *chars], chars)]
    n = len(chars)
    previous: list[float] = []
    predecessors: list[list[int]] = []

    for i, p in enumerate(wanted):
        row = [_IMPOSSIBLE] * n
        pred = [-1] * n
        carry, carry_k = _IMPOSSIBLE, -1
        for j in range(n):
            if i > 0 and j >= 2:
                carry += _GAP_EXTENSION
                candidate = previous[j - 2] + _GAP_START
                if candidate > carry:
                    carry, carry_k = candidate, j - 2
            if folded[j] != p:
                continue
            score = _SCORE_MATCH + bonuses[j] * (_FIRST_CHAR_MULTIPLIER if i == 0 else 1)
            if chars[j] != pattern[i]:
                score += _PENALTY_CASE_MISMATCH
            if i == 0:
                row[j] = score
                continue
            best, k = carry, carry_k
            if j >= 1 and previous[j - 1] + _BONUS_CONSECUTIVE > best:
                best, k = previous[j - 1] + _BONUS_CONSECUTIVE, j - 1
            if best == _IMPOSSIBLE:
                continue
            row[j] = score + best
            pred[j] = k
        predecessors.append(pred)
        previous = row

    end = max(range(n), key=lambda j: previous[j])
    if previous[end] == _IMPOSSIBLE:
        return None
    total = int(previous[end])
    indices = [end]
    for pred in reversed(predecessors[1:]):
        end = pred[end]
        indices.append(end)
    indices.reverse()
    return total, indices


def _allowed(entry: History, filter_mode: FilterMode, context: Context) -> bool:
    if filter_mode is FilterMode.GLOBAL:
        return True
    if filter_mode is FilterMode.HOST:
        return entry.hostname == context.hostname
    if filter_mode is FilterMode.SESSION:
        return entry.session == context.session
    return entry.cwd == context.cwd


def _age_seconds(timestamp: datetime, now: Optional[datetime]) -> int:
    if now is None:
        now = datetime.now(timezone.utc)
        if timestamp.tzinfo is None:
            now = now.replace(tzinfo=None)
    return int((now - timestamp).total_seconds())


def fuzzy_search(
    entries: Iterable[tuple[History, int]],
    query: str,
    filter_mode: FilterMode,
    context: Context,
    now: Optional[datetime] = None,
) -> list[History]:
    """Up to 200 distinct commands matching ``query``, best first.

    ``entries`` pairs each history entry with how often its command was run.
    """
    results: list[History] = []
    ranks: list[float] = []

    for entry, count in entries:
        if not _allowed(entry, filter_mode, context):
            continue
        match = fuzzy_indices(entry.command, query)
        if match is None:
            continue
        fuzzy_score, indices = match
        begin = indices[0] if indices else 0

        age = _age_seconds(entry.timestamp, now)
        duration = math.log2(age) if age > 0 else 1.0
        if not math.isfinite(duration) or duration <= 1.0:
            duration = 1.0
        count_weight = math.log2(count + 8.0)
        begin_weight = math.log2(begin + 16.0)
        path_weight = math.log2(path_dist(entry.cwd, context.cwd) + 8.0)

        # Lower is better: strong matches, frequent, recent and nearby commands rank first.
        score = -fuzzy_score * count_weight / path_weight / duration / begin_weight

        for i, existing in enumerate(results):
            if ranks[i] > score:
                ranks.insert(i, score)
                results.insert(i, entry)
                for j in range(i + 1, len(results)):
                    if results[j].command == entry.command:
                        del ranks[j]
                        del results[j]
                        break
                if len(ranks) > _LIMIT:
                    ranks.pop()
                    results.pop()
                break
            if existing.command == entry.command:
                break
        else:
            if len(results) < _LIMIT:
                ranks.append(score)
                results.append(entry)

    return results