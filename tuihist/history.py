"""History entries and their formatted listing."""

from __future__ import annotations

import enum
import sys
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, TextIO, Union

from tuihist.duration import format_duration

_HUMAN_FORMAT = "{time} · {duration}\t{command}"
_REGULAR_FORMAT = "{time}\t{command}\t{duration}"


@dataclass
class History:
    """One command run in a shell.

    ``duration`` is in nanoseconds; -1 means the command has not finished.
    """

    timestamp: datetime
    command: str
    cwd: str = ""
    exit: int = -1
    duration: int = -1
    session: str = ""
    hostname: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def success(self) -> bool:
        """Whether the command exited cleanly or is still running."""
        return self.exit == 0 or self.duration == -1


class ListMode(enum.Enum):
    HUMAN = "human"
    CMD_ONLY = "cmd_only"
    REGULAR = "regular"

    @classmethod
    def from_flags(cls, human: bool, cmd_only: bool) -> ListMode:
        if human:
            return cls.HUMAN
        if cmd_only:
            return cls.CMD_ONLY
        return cls.REGULAR


class FormatError(ValueError):
    """A format string is malformed or names an unknown key."""


@dataclass(frozen=True)
class _Key:
    name: str


_Segment = Union[str, _Key]


def _parse(template: str) -> list[_Segment]:
    segments: list[_Segment] = []
    literal: list[str] = []
    i = 0
    while i < len(template):
        c = template[i]
        if c == "{":
            if template.startswith("{{", i):
                literal.append("{")
                i += 2
                continue
            end = template.find("}", i + 1)
            if end == -1:
                raise FormatError(f"unclosed '{{' at position {i}")
            name = template[i + 1 : end]
            if "{" in name:
                raise FormatError(f"unexpected '{{' inside key at position {i}")
            if literal:
                segments.append("".join(literal))
                literal = []
            segments.append(_Key(name))
            i = end + 1
        elif c == "}":
            if template.startswith("}}", i):
                literal.append("}")
                i += 2
                continue
            raise FormatError(f"unmatched '}}' at position {i}")
        else:
            literal.append(c)
            i += 1
    if literal:
        segments.append("".join(literal))
    return segments


def _since(timestamp: datetime) -> timedelta:
    if timestamp.tzinfo is None:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
    else:
        now = datetime.now(timezone.utc)
    return max(now - timestamp, timedelta(0))


def _value(history: History, key: str) -> str:
    if key == "command":
        return history.command.strip()
    if key == "directory":
        return history.cwd.strip()
    if key == "exit":
        return str(history.exit)
    if key == "duration":
        nanos = max(history.duration, 0)
        return format_duration(timedelta(microseconds=nanos // 1000))
    if key == "time":
        return history.timestamp.strftime("%Y-%m-%d %H:%M:%S")
    if key == "relativetime":
        return format_duration(_since(history.timestamp))
    if key == "host":
        return history.hostname.split(":", 1)[0]
    if key == "user":
        _, sep, user = history.hostname.partition(":")
        return user if sep else ""
    raise FormatError(f"unknown key: {key}")


def _render(history: History, segments: Iterable[_Segment]) -> str:
    return "".join(
        _value(history, seg.name) if isinstance(seg, _Key) else seg for seg in segments
    )


def format_history(history: History, template: str) -> str:
    """Fill ``template`` with fields of ``history``.

    Keys: command, directory, exit, duration, time, relativetime, host, user.
    Literal braces are written ``{{`` and ``}}``.
    """
    return _render(history, _parse(template))


def print_list(
    entries: Iterable[History],
    list_mode: ListMode,
    fmt: Optional[str] = None,
    out: Optional[TextIO] = None,
) -> None:
    """Write entries, last one first, one per line; a closed pipe ends output quietly."""
    out = sys.stdout if out is None else out
    if list_mode is ListMode.CMD_ONLY:
        segments: list[_Segment] = [_Key("command")]
    else:
        default = _HUMAN_FORMAT if list_mode is ListMode.HUMAN else _REGULAR_FORMAT
        segments = _parse((fmt if fmt is not None else default).replace("\\t", "\t"))

    try:
        for entry in reversed(list(entries)):
            out.write(_render(entry, segments) + "\n")
        out.flush()
    except BrokenPipeError:
        return