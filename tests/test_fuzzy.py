from datetime import datetime, timedelta, timezone

import pytest

from tuihist.fuzzy import Context, FilterMode, fuzzy_indices, fuzzy_search, path_dist
from tuihist.history import History

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)
CONTEXT = Context(session="s1", cwd="/home/u", hostname="box:u")


def entry(command, hostname="box:u", session="s1", cwd="/home/u", age=timedelta(hours=1)):
    return History(
        NOW - age, command, cwd=cwd, exit=0, duration=1, session=session, hostname=hostname
    )


def search(entries, query, mode=FilterMode.GLOBAL):
    return fuzzy_search([(e, 1) for e in entries], query, mode, CONTEXT, NOW)


def test_path_dist_same_path():
    assert path_dist("/home/u/src", "/home/u/src") == 0


def test_path_dist_parent_and_child():
    assert path_dist("/home", "/home/u/src") == 2


def test_path_dist_siblings():
    assert path_dist("/a/x", "/a/y") == 2


@pytest.mark.parametrize(
    "a,b", [("/a/b/c", "/a"), ("/x/y", "/a/b"), ("/", "/p/q/r"), ("/a/b", "/a/c/d")]
)
def test_path_dist_is_symmetric(a, b):
    assert path_dist(a, b) == path_dist(b, a)


@pytest.mark.parametrize(
    "choice,pattern",
    [("git status", "gst"), ("cargo build --release", "cbr"), ("ls -la", "la")],
)
def test_indices_point_at_pattern(choice, pattern):
    _, indices = fuzzy_indices(choice, pattern)
    assert indices == sorted(set(indices))
    assert [choice[i].lower() for i in indices] == list(pattern)


def test_no_match():
    assert fuzzy_indices("abc", "xyz") is None
    assert fuzzy_indices("abc", "cba") is None


def test_empty_pattern_matches():
    assert fuzzy_indices("anything", "") == (0, [])


def test_smart_case():
    assert fuzzy_indices("Hello", "h") is not None and fuzzy_indices("Hello", "h")[1] == [0]
    assert fuzzy_indices("hello", "H") is None


def test_consecutive_beats_scattered():
    tight, _ = fuzzy_indices("git status", "git")
    loose, _ = fuzzy_indices("gaaaiaaaat", "git")
    assert tight > loose


def test_search_excludes_non_matches():
    results = search([entry("ls -la"), entry("git push"), entry("echo")], "git")
    assert [h.command for h in results] == ["git push"]


def test_search_ranks_better_match_first():
    results = search([entry("gaaaiaaaat"), entry("git status")], "git")
    assert [h.command for h in results] == ["git status", "gaaaiaaaat"]


def test_search_removes_duplicates():
    results = search(
        [entry("make test", age=timedelta(days=3)), entry("make test"), entry("make")],
        "make",
    )
    commands = [h.command for h in results]
    assert sorted(commands) == ["make", "make test"]


def test_search_host_filter():
    results = search(
        [entry("ls one"), entry("ls two", hostname="other:u")], "ls", FilterMode.HOST
    )
    assert [h.command for h in results] == ["ls one"]


def test_search_directory_filter():
    results = search(
        [entry("ls one", cwd="/tmp"), entry("ls two")], "ls", FilterMode.DIRECTORY
    )
    assert [h.command for h in results] == ["ls two"]


def test_search_session_filter():
    results = search(
        [entry("ls one", session="s2"), entry("ls two")], "ls", FilterMode.SESSION
    )
    assert [h.command for h in results] == ["ls two"]


def test_search_global_keeps_everything_matching():
    results = search(
        [entry("ls one", hostname="other:u", cwd="/tmp"), entry("ls two", session="s9")], "ls"
    )
    assert sorted(h.command for h in results) == ["ls one", "ls two"]


def test_search_is_limited():
    results = search([entry(f"cmd{i}") for i in range(250)], "cmd")
    assert len(results) == 200
    assert len({h.command for h in results}) == 200