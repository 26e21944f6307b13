import pytest

from tedit.keymaps import (
    DEFAULT_BINDINGS,
    Binding,
    Command,
    CommandRef,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_command(command: Command = Command.UNDO) -> CommandRef:
    return CommandRef(command=command, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    token: str = "ctrl+z",
    command: Command = Command.UNDO,
) -> Binding:
    return Binding(id=binding_id, stroke=KeyStroke.parse(token), command=command)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())
    binding = make_binding(binding_id="undo")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings()) == [binding]
    assert registry.lookup("ctrl+z") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())
    registry.register_binding(make_binding(binding_id="undo"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="undo.duplicate"))


def test_register_binding_requires_command() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="undo"))


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())

    first = make_binding(binding_id="undo")
    second = make_binding(binding_id="undo.alt")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.lookup("ctrl+z") == second


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())
    binding = make_binding(binding_id="undo")
    registry.register_binding(binding)

    removed = registry.unregister_binding("undo")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.lookup("ctrl+z") is None


def test_key_stroke_normalizes_modifiers_and_label() -> None:
    stroke = KeyStroke("Z", ("Ctrl",))

    assert stroke.token == "ctrl+z"
    assert stroke.label == "Ctrl-Z"
    assert KeyStroke.parse("pagedown").label == "Pagedown"


def test_load_default_keymaps_registers_every_command() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().command_count == len(Command)
    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.lookup("ctrl+z").command is Command.UNDO
    assert registry.lookup("ctrl+@").command is Command.SELECT
    assert registry.lookup("enter").command is Command.NEWLINE


def test_load_default_keymaps_exclude_and_extra() -> None:
    registry = KeymapRegistry()
    extra = make_binding(binding_id="undo.alt", token="ctrl+y")

    load_default_keymaps(
        registry,
        exclude_commands=(Command.HELP,),
        extra_bindings=(extra,),
    )

    assert registry.lookup("ctrl+h") is None
    assert registry.lookup("ctrl+y") == extra
    with pytest.raises(KeyError):
        registry.get_command(Command.HELP)


def test_help_entries_skip_hidden_aliases() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    entries = dict(registry.help_entries())

    assert entries["Ctrl-Z"] == "undo last change"
    assert "Ctrl-@" not in entries
    assert "F1" not in entries
