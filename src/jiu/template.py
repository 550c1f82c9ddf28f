from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from jiu.arguments import ArgumentSlot, Many, MatchResult, Quantifier, Single
from jiu.errors import (
    PlaceholderQuantifierError,
    UndefinedEnvironmentVariableError,
    UnknownArgumentError,
)

ENV_PREFIX = "$"


@dataclass(frozen=True)
class Literal:
    value: str


@dataclass(frozen=True)
class Placeholder:
    name: str
    # Quantifier written on the placeholder itself (`["?profile"]`), if any.
    quantifier: Quantifier | None = None

    @property
    def is_environment(self) -> bool:
        return self.name.startswith(ENV_PREFIX)


CommandToken = Literal | Placeholder


def check_placeholders(
    command: Sequence[CommandToken],
    slots: Sequence[ArgumentSlot],
    *,
    recipe_name: str,
) -> None:
    """
    Reject placeholders whose symbol contradicts the argument they name.

    A bare placeholder and one naming an undeclared argument pass here; the latter fails later
    in `interpolate`. A symbol on a `$NAME` placeholder is always rejected.
    """

    declared = {slot.name: slot.quantifier for slot in slots}
    for token in command:
        if not isinstance(token, Placeholder) or token.quantifier is None:
            continue
        written = f"{token.quantifier.symbol}{token.name}"
        if token.is_environment:
            raise PlaceholderQuantifierError(written, recipe_name=recipe_name, declared=None)
        expected = declared.get(token.name)
        if expected is None or expected is token.quantifier:
            continue
        raise PlaceholderQuantifierError(
            written, recipe_name=recipe_name, declared=f"{expected.symbol}{token.name}"
        )


def interpolate(
    command: Sequence[CommandToken],
    bindings: MatchResult,
    env_lookup: Callable[[str], str | None],
) -> list[str]:
    """
    Expand a command template into a flat argv.

    `$NAME` placeholders read the environment and fail when the variable is unset (an empty
    value is kept). Other placeholders read the matched arguments: an absent optional expands
    to nothing and a variadic expands to one element per value.
    """

    out: list[str] = []
    for token in command:
        if isinstance(token, Literal):
            out.append(token.value)
            continue

        if token.is_environment:
            var_name = token.name[len(ENV_PREFIX) :]
            value = env_lookup(var_name)
            if value is None:
                raise UndefinedEnvironmentVariableError(var_name)
            out.append(value)
            continue

        bound = bindings.get(token.name)
        if bound is None:
            raise UnknownArgumentError(token.name)
        if isinstance(bound, Single):
            if bound.value is not None:
                out.append(bound.value)
        elif isinstance(bound, Many):
            out.extend(bound.values)
    return out
