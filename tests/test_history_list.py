from datetime import datetime, timedelta, timezone

import pytest

from tuihist.buffer import Buffer
from tuihist.duration import format_duration
from tuihist.history import History
from tuihist.history_list import HistoryList, ListState
from tuihist.layout import Rect
from tuihist.style import Color, Modifier

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def entry(command="ls -la", exit=0, age=timedelta(hours=2)):
    return History(NOW - age, command, exit=exit, duration=1_000_000_000)


def row(buf, y):
    return "".join(buf.get(x, y).symbol for x in range(buf.area.left(), buf.area.right()))


def render(entries, area, state=None):
    state = ListState() if state is None else state
    buf = Buffer.empty(area)
    HistoryList(entries, now=NOW).render(area, buf, state)
    return buf, state


@pytest.mark.parametrize("height", [1, 3, 10, 20])
def test_items_bounds_contains_selection(height):
    hl = HistoryList([entry() for _ in range(50)], now=NOW)
    for selected in range(50):
        for offset in range(0, 50, 7):
            start, end = hl.items_bounds(selected, offset, height)
            assert end - start == height
            assert start <= selected < end


def test_render_single_entry():
    buf, state = render([entry()], Rect(0, 0, 40, 3))
    assert row(buf, 2).rstrip() == " > 1s     2h ago ls -la"
    assert row(buf, 0).strip() == ""
    assert buf.get(3, 2).fg == Color.GREEN
    assert buf.get(10, 2).fg == Color.BLUE
    assert buf.get(17, 2).fg == Color.RED
    assert Modifier.BOLD in buf.get(17, 2).modifier
    assert state.offset == 0
    assert state.max_entries == 3


def test_failed_command_duration_is_red():
    buf, _ = render([entry(exit=1)], Rect(0, 0, 40, 1))
    assert buf.get(3, 0).fg == Color.RED


def test_unselected_command_is_plain():
    buf, _ = render([entry(), entry("echo hi")], Rect(0, 0, 40, 2))
    assert "echo hi" in row(buf, 0)
    assert buf.get(17, 0).fg == Color.RESET


def test_index_markers():
    buf, _ = render([entry(), entry(), entry()], Rect(0, 0, 40, 3))
    assert row(buf, 2).startswith(" > ")
    assert row(buf, 1).startswith(" 1 ")
    assert row(buf, 0).startswith(" 2 ")


def test_entries_below_selection_have_blank_marker():
    buf, _ = render([entry(), entry()], Rect(0, 0, 40, 2), ListState(selected=1))
    assert row(buf, 1).startswith("   1s")
    assert row(buf, 0).startswith(" > ")


def test_future_timestamp_shows_zero():
    buf, _ = render([entry(age=-timedelta(hours=1))], Rect(0, 0, 40, 1))
    assert format_duration(timedelta(0)) + " ago" in row(buf, 0)


def test_narrow_area_is_clipped():
    buf, _ = render([entry()], Rect(0, 0, 5, 1))
    assert row(buf, 0) == " > " + format_duration(timedelta(seconds=1))


def test_empty_history_draws_nothing():
    area = Rect(0, 0, 20, 4)
    state = ListState(offset=3, selected=2)
    buf, state = render([], area, state)
    assert buf == Buffer.empty(area)
    assert (state.offset, state.max_entries) == (3, 0)


def test_scrolling_keeps_selection_visible():
    entries = [entry(f"cmd{i}") for i in range(30)]
    _, state = render(entries, Rect(0, 0, 40, 5), ListState(selected=20))
    assert state.max_entries == 5
    assert state.offset <= 20 < state.offset + 5


def test_list_state_select():
    state = ListState()
    state.select(7)
    assert state.selected == 7