from __future__ import annotations

from tedit.buffer import Buffer


def test_repeated_search_wraps_around() -> None:
    buffer = Buffer.from_lines(["foo bar", "baz foo"])

    assert buffer.find("foo") == (0, 0)
    assert buffer.find("foo") == (1, 4)
    assert buffer.find("foo") == (0, 0)
    assert buffer.cursor == (0, 0)


def test_new_phrase_starts_at_cursor_line() -> None:
    buffer = Buffer.from_lines(["needle", "hay", "needle again"])
    buffer.document.set_cursor(2, 0)

    assert buffer.find("needle") == (2, 0)
    assert buffer.find("needle") == (0, 0)


def test_columns_count_code_points() -> None:
    buffer = Buffer.from_lines(["中文例子 text"])

    assert buffer.find("例子") == (0, 2)
    assert buffer.find("text") == (0, 5)


def test_missing_phrase_keeps_cursor_and_state() -> None:
    buffer = Buffer.from_lines(["foo bar", "baz foo"])
    buffer.find("foo")
    buffer.find("foo")

    assert buffer.find("absent") is None
    assert buffer.cursor == (1, 4)
    assert buffer.search.phrase == "absent"
    assert buffer.search.last_line == 1
    assert buffer.search.last_query == "absent"


def test_search_finishes_pending_typing() -> None:
    buffer = Buffer.from_lines(["abc"])
    buffer.insert_character("x")

    buffer.find("c")
    buffer.insert_character("y")

    assert len(buffer.history) == 2


def test_phrase_after_a_miss_restarts_from_cursor() -> None:
    buffer = Buffer.from_lines(["foo", "bar", "foo"])

    assert buffer.find("foo") == (0, 0)
    assert buffer.find("foo") == (2, 0)
    assert buffer.find("zzz") is None

    assert buffer.find("foo") == (2, 0)
