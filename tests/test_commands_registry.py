import pytest

from text_macros.commands import (
    DEFAULT_COMMANDS,
    CommandConflictError,
    CommandRef,
    CommandRegistry,
    CommandResult,
    load_default_commands,
)


def make_command(command_id: str = "test.command") -> CommandRef:
    return CommandRef(id=command_id, handler=lambda context: None)


def test_register_command_and_bind() -> None:
    registry = CommandRegistry()
    registry.register_command(make_command())

    binding = registry.bind(["ctrl+o", "x"], "test.command")

    assert binding.signature == "ctrl+o x"
    assert registry.binding_for(("ctrl+o", "x")) == binding
    assert registry.keys_for("test.command") == (("ctrl+o", "x"),)
    assert registry.stats().binding_count == 1


def test_register_command_twice_requires_replace() -> None:
    registry = CommandRegistry()
    registry.register_command(make_command())

    with pytest.raises(ValueError):
        registry.register_command(make_command())

    registry.register_command(make_command(), replace=True)
    assert registry.stats().command_count == 1


def test_bind_unknown_command() -> None:
    registry = CommandRegistry()

    with pytest.raises(KeyError):
        registry.bind(["x"], "missing")


def test_bind_conflict_detection() -> None:
    registry = CommandRegistry()
    registry.register_command(make_command("a"))
    registry.register_command(make_command("b"))
    registry.bind(["ctrl+o", "a"], "a")

    with pytest.raises(CommandConflictError) as excinfo:
        registry.bind(["ctrl+o", "a"], "b")
    assert excinfo.value.conflicts[0].command_id == "a"

    with pytest.raises(CommandConflictError):
        registry.bind(["ctrl+o"], "b")


def test_bind_with_replace_drops_conflicts() -> None:
    registry = CommandRegistry()
    registry.register_command(make_command("a"))
    registry.register_command(make_command("b"))
    registry.bind(["ctrl+o", "a"], "a")

    registry.bind(["ctrl+o"], "b", replace=True)

    assert [binding.command_id for binding in registry.iter_bindings()] == ["b"]


def test_unbind() -> None:
    registry = CommandRegistry()
    registry.register_command(make_command())
    binding = registry.bind(["f5"], "test.command")

    assert registry.unbind(["f5"]) == binding
    assert registry.unbind(["f5"]) is None


def test_empty_key_sequence_rejected() -> None:
    registry = CommandRegistry()
    registry.register_command(make_command())

    with pytest.raises(ValueError):
        registry.bind(["", " "], "test.command")


def test_handler_returning_none_counts_as_consumed() -> None:
    from text_macros.buffer import Buffer
    from text_macros.commands import CommandContext

    registry = CommandRegistry()
    registry.register_command(make_command())

    result = registry.run("test.command", CommandContext(buffer=Buffer()))

    assert result == CommandResult(consumed=True, command="test.command")


def test_command_ref_validation() -> None:
    with pytest.raises(ValueError):
        CommandRef(id="", handler=lambda context: None)
    with pytest.raises(TypeError):
        CommandRef(id="x", handler="not callable")  # type: ignore[arg-type]


def test_load_default_commands_registers_everything() -> None:
    registry = CommandRegistry()

    load_default_commands(registry)

    assert registry.stats().command_count == len(DEFAULT_COMMANDS)
    assert registry.binding_for(("ctrl+o", "q")).command_id == "quote-expression"


def test_load_default_commands_filters() -> None:
    registry = CommandRegistry()

    load_default_commands(registry, include=("snip-region", "tag-region"), exclude=("tag-region",))

    assert [command.id for command in registry.iter_commands()] == ["snip-region"]
    assert registry.stats().binding_count == 1


def test_load_default_commands_key_overrides() -> None:
    registry = CommandRegistry()

    load_default_commands(registry, key_overrides={"undo": ("ctrl+z",)})

    assert registry.keys_for("undo") == (("ctrl+z",),)
    assert registry.binding_for(("ctrl+o", "z")) is None
