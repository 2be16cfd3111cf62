import pytest

from mark_it_down.context import normalize_key
from mark_it_down.keymaps import (
    DEFAULT_BINDINGS,
    DEFAULT_COMMANDS,
    Binding,
    Command,
    Condition,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_command(command_id: str = "core.test") -> Command:
    return Command(id=command_id, handler=lambda *args: None)


def make_binding(
    binding_id: str,
    *,
    scope: str = "global",
    key: str = "ctrl+s",
    command_id: str = "core.test",
    when: tuple = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        scope=scope,
        key=key,
        command_id=command_id,
        when=when,
        priority=priority,
    )


@pytest.mark.parametrize(
    ("combo", "token"),
    [
        ("shift+ctrl+S", "ctrl+shift+s"),
        ("ctrl++", "ctrl++"),
        ("F3", "f3"),
        ("super+alt+x", "alt+super+x"),
    ],
)
def test_normalize_key_orders_modifiers(combo: str, token: str) -> None:
    assert normalize_key(combo) == token


def test_normalize_key_rejects_empty_combo() -> None:
    with pytest.raises(ValueError):
        normalize_key("")


def test_binding_normalizes_key_and_parses_conditions() -> None:
    binding = make_binding("global.discard", key="Shift+Ctrl+Z", when=("dirty", "!find_open"))

    assert binding.key == "ctrl+shift+z"
    assert binding.when == (Condition("dirty"), Condition("find_open", expected=False))
    assert binding.applies({"dirty": True})
    assert not binding.applies({"dirty": True, "find_open": True})
    assert not binding.applies({})


def test_condition_rejects_blank_flag() -> None:
    with pytest.raises(ValueError):
        Condition.parse("!")


def test_command_requires_callable_handler() -> None:
    with pytest.raises(TypeError):
        Command(id="core.broken", handler="not callable")  # type: ignore[arg-type]


def test_bind_files_binding_under_scope_and_key() -> None:
    registry = KeymapRegistry()
    registry.add_command(make_command())
    binding = registry.bind(make_binding("global.save"))

    assert registry.candidates("global", "ctrl+s") == (binding,)
    assert registry.candidates("editing", "ctrl+s") == ()
    assert list(registry.bindings(scope="global")) == [binding]
    assert registry.binding("global.save") is binding


def test_bind_rejects_unknown_command() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.bind(make_binding("global.save", command_id="core.missing"))


def test_bind_rejects_duplicate_id() -> None:
    registry = KeymapRegistry()
    registry.add_command(make_command())
    registry.bind(make_binding("global.save"))

    with pytest.raises(ValueError):
        registry.bind(make_binding("global.save", key="f2"))


def test_add_command_rejects_duplicate_id() -> None:
    registry = KeymapRegistry()
    registry.add_command(make_command())

    with pytest.raises(ValueError):
        registry.add_command(make_command())


def test_ambiguous_binding_raises_conflict() -> None:
    registry = KeymapRegistry()
    registry.add_command(make_command())
    first = registry.bind(make_binding("global.save", when=("dirty",)))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.bind(make_binding("global.save_again", key="CTRL+S", when=("dirty",)))

    assert excinfo.value.conflicts == (first,)


def test_same_key_with_other_condition_or_priority_is_allowed() -> None:
    registry = KeymapRegistry()
    registry.add_command(make_command())
    registry.bind(make_binding("global.save"))
    registry.bind(make_binding("global.save_dirty", when=("dirty",)))
    high = registry.bind(make_binding("global.save_high", priority=5))
    registry.bind(make_binding("editing.save", scope="editing"))

    candidates = registry.candidates("global", "ctrl+s")

    assert candidates[0] is high
    assert {binding.id for binding in candidates} == {
        "global.save",
        "global.save_dirty",
        "global.save_high",
    }
    assert registry.scopes() == ("editing", "global")


def test_missing_lookups_raise_key_error() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.command("core.missing")
    with pytest.raises(KeyError):
        registry.binding("global.missing")


def test_load_default_keymaps_registers_every_binding() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert len(list(registry.bindings())) == len(DEFAULT_BINDINGS)
    for command in DEFAULT_COMMANDS:
        assert registry.command(command.id) is command
    assert registry.scopes() == ("editing", "find", "global")


def test_load_default_keymaps_honours_exclusions_and_extras() -> None:
    registry = KeymapRegistry()
    extra = make_binding("global.save_f2", key="f2", command_id="core.save_document")

    load_default_keymaps(
        registry, exclude_bindings=("global.save_document_as_f12",), extra_bindings=(extra,)
    )

    assert registry.candidates("global", "f12") == ()
    assert registry.candidates("global", "f2") == (extra,)


def test_default_bindings_are_unique_per_scope_and_key() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    clash = make_binding("global.open_again", key="ctrl+o", command_id="core.open_document")
    with pytest.raises(KeymapConflictError):
        registry.bind(clash)
