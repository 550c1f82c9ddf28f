from __future__ import annotations

import logging

import pytest

from jiu.arguments import (
    ArgumentSlot,
    Many,
    Quantifier,
    Single,
    compile_slot,
    compile_slots,
    match_arguments,
)
from jiu.errors import MatchError, MissingArgumentError, TooManyArgumentsError


@pytest.mark.parametrize(
    ("spec", "name", "quantifier"),
    [
        ("target", "target", Quantifier.REQUIRED),
        ("?profile", "profile", Quantifier.OPTIONAL_ONE),
        ("*rest", "rest", Quantifier.VARIADIC_ANY),
        ("+files", "files", Quantifier.VARIADIC_AT_LEAST_ONE),
    ],
)
def test_compile_slot_reads_leading_symbol(spec: str, name: str, quantifier: Quantifier) -> None:
    slot = compile_slot(spec)
    assert slot == ArgumentSlot(name=name, quantifier=quantifier)
    assert slot.spec == spec


def test_compile_slot_accepts_malformed_names() -> None:
    assert compile_slot("") == ArgumentSlot(name="", quantifier=Quantifier.REQUIRED)
    assert compile_slot("?") == ArgumentSlot(name="", quantifier=Quantifier.OPTIONAL_ONE)
    assert compile_slot("two words").name == "two words"
    # Only the first character is a symbol.
    assert compile_slot("??x") == ArgumentSlot(name="?x", quantifier=Quantifier.OPTIONAL_ONE)
    assert compile_slot("-flag") == ArgumentSlot(name="-flag", quantifier=Quantifier.REQUIRED)


@pytest.mark.parametrize("k", [0, 1, 2, 5])
def test_required_slots_bind_one_value_each_in_order(k: int) -> None:
    slots = compile_slots([f"a{i}" for i in range(k)])
    args = [f"v{i}" for i in range(k)]

    bindings = match_arguments(slots, args)

    assert bindings == {f"a{i}": Single(f"v{i}") for i in range(k)}


@pytest.mark.parametrize(("k", "given"), [(1, 0), (3, 0), (3, 1), (3, 2)])
def test_required_slots_report_first_unsatisfied_slot(k: int, given: int) -> None:
    slots = compile_slots([f"a{i}" for i in range(k)])

    with pytest.raises(MissingArgumentError) as exc:
        match_arguments(slots, [f"v{i}" for i in range(given)])

    assert exc.value.slot_name == f"a{given}"
    assert exc.value.code == "missing_argument"
    assert exc.value.details == {"argument": f"a{given}"}


@pytest.mark.parametrize(
    ("specs", "args"),
    [
        ([], ["x"]),
        (["a"], ["x", "y"]),
        (["a", "?b"], ["x", "y", "z"]),
        (["?a", "?b"], ["1", "2", "3", "4"]),
    ],
)
def test_extra_arguments_are_rejected(specs: list[str], args: list[str]) -> None:
    with pytest.raises(TooManyArgumentsError) as exc:
        match_arguments(compile_slots(specs), args)

    consumed = len(specs)
    assert exc.value.remaining == tuple(args[consumed:])
    assert isinstance(exc.value, MatchError)


def test_optional_slot_binds_none_when_input_is_exhausted() -> None:
    bindings = match_arguments(compile_slots(["a", "?b"]), ["x"])
    assert bindings == {"a": Single("x"), "b": Single(None)}


def test_optional_slot_is_greedy_and_starves_later_required_slot() -> None:
    with pytest.raises(MissingArgumentError) as exc:
        match_arguments(compile_slots(["?a", "b"]), ["x"])
    assert exc.value.slot_name == "b"


def test_optional_then_required_succeeds_with_enough_input() -> None:
    bindings = match_arguments(compile_slots(["?a", "b"]), ["x", "y"])
    assert bindings == {"a": Single("x"), "b": Single("y")}


def test_variadic_any_takes_everything_left() -> None:
    bindings = match_arguments(compile_slots(["a", "*rest"]), ["x", "y", "z"])
    assert bindings == {"a": Single("x"), "rest": Many(("y", "z"))}


def test_variadic_any_accepts_zero_values() -> None:
    bindings = match_arguments(compile_slots(["*rest"]), [])
    assert bindings == {"rest": Many(())}


def test_variadic_at_least_one_requires_a_value() -> None:
    with pytest.raises(MissingArgumentError) as exc:
        match_arguments(compile_slots(["a", "+files"]), ["x"])
    assert exc.value.slot_name == "files"

    bindings = match_arguments(compile_slots(["+files"]), ["f1", "f2"])
    assert bindings == {"files": Many(("f1", "f2"))}


def test_variadic_then_required_always_starves() -> None:
    with pytest.raises(MissingArgumentError) as exc:
        match_arguments(compile_slots(["*a", "b"]), ["x", "y", "z"])
    assert exc.value.slot_name == "b"


@pytest.mark.parametrize("trailing", ["?b", "*b"])
@pytest.mark.parametrize("args", [["x"], ["x", "y"], ["x", "y", "z"]])
def test_slot_after_variadic_sees_no_input(trailing: str, args: list[str]) -> None:
    bindings = match_arguments(compile_slots(["*a", trailing]), args)

    assert bindings["a"] == Many(tuple(args))
    expected_trailing = Single(None) if trailing.startswith("?") else Many(())
    assert bindings["b"] == expected_trailing


def test_matching_is_positional_not_by_name() -> None:
    bindings = match_arguments(compile_slots(["second", "first"]), ["1", "2"])
    assert list(bindings.items()) == [("second", Single("1")), ("first", Single("2"))]


def test_duplicate_slot_names_keep_later_binding() -> None:
    bindings = match_arguments(compile_slots(["a", "a"]), ["1", "2"])
    assert bindings == {"a": Single("2")}


def test_debug_logs_each_branch(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="jiu.arguments")

    match_arguments(compile_slots(["a", "?b", "*c"]), ["x"], debug=True)

    messages = [r.getMessage() for r in caplog.records]
    assert any("'a' (REQUIRED)" in m for m in messages)
    assert any("'b' (OPTIONAL_ONE)" in m for m in messages)
    assert any("'c' (VARIADIC_ANY)" in m for m in messages)


def test_no_logging_without_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="jiu.arguments")
    match_arguments(compile_slots(["a"]), ["x"])
    assert caplog.records == []
