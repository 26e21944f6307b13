from __future__ import annotations

from tedit.base import EventBus, KeyInput, ScriptedKeySource
from tedit.session import KeyPrompter, LineInput, PromptState


def make_prompter(*keys: str):
    bus = EventBus()
    states: list[object] = []
    bus.subscribe("prompt.update", states.append)
    bus.subscribe("prompt.close", states.append)
    return KeyPrompter(ScriptedKeySource(keys), bus), states


def test_read_string_edits_and_confirms() -> None:
    prompter, states = make_prompter("a", "b", "c", "left", "backspace", "X", "enter")

    assert prompter.read_string("Filename") == "aXc"
    assert states[0] == PromptState("Filename: ", "", 0)
    assert states[-1] is None


def test_read_string_keeps_initial_text() -> None:
    prompter, _ = make_prompter("!", "enter")

    assert prompter.read_string("Find", "foo") == "foo!"


def test_abort_returns_none() -> None:
    prompter, states = make_prompter("a", "ctrl+g")

    assert prompter.read_string("Filename") is None
    assert states[-1] is None

    prompter, _ = make_prompter("escape")
    assert prompter.query("Save file?", "ync") is None


def test_query_ignores_other_keys() -> None:
    prompter, states = make_prompter("x", "Y", "n")

    assert prompter.query("Save file?", "ync") == "n"
    assert states[0] == PromptState("Save file? [ync]", "", 0)


def test_line_input_kill_keys() -> None:
    line = LineInput.prefilled("hello world")
    line.cursor = 5

    assert line.handle(KeyInput.parse("ctrl+k")) is True
    assert line.text == "hello"
    line.handle(KeyInput.parse("ctrl+u"))
    assert (line.text, line.cursor) == ("", 0)
    assert line.handle(KeyInput.parse("f5")) is False
