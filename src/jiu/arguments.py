from __future__ import annotations

import enum
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from jiu.errors import MissingArgumentError, TooManyArgumentsError

logger = logging.getLogger(__name__)


class Quantifier(enum.Enum):
    REQUIRED = ""
    OPTIONAL_ONE = "?"
    VARIADIC_ANY = "*"
    VARIADIC_AT_LEAST_ONE = "+"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def is_variadic(self) -> bool:
        return self in (Quantifier.VARIADIC_ANY, Quantifier.VARIADIC_AT_LEAST_ONE)


_SYMBOLS: dict[str, Quantifier] = {
    q.symbol: q for q in Quantifier if q is not Quantifier.REQUIRED
}


@dataclass(frozen=True)
class ArgumentSlot:
    name: str
    quantifier: Quantifier = Quantifier.REQUIRED

    @property
    def spec(self) -> str:
        return f"{self.quantifier.symbol}{self.name}"


@dataclass(frozen=True)
class Single:
    """One matched value; ``None`` marks an optional slot that received nothing."""

    value: str | None


@dataclass(frozen=True)
class Many:
    values: tuple[str, ...]


ArgumentValue = Single | Many
MatchResult = Mapping[str, ArgumentValue]


def compile_slot(spec: str) -> ArgumentSlot:
    """
    Compile a declared argument string such as ``"?profile"`` into a slot.

    Any string compiles: a missing or unknown leading symbol means the slot is required and
    the whole string is its name.
    """

    quantifier = _SYMBOLS.get(spec[:1])
    if quantifier is None:
        return ArgumentSlot(name=spec, quantifier=Quantifier.REQUIRED)
    return ArgumentSlot(name=spec[1:], quantifier=quantifier)


def compile_slots(specs: Sequence[str]) -> tuple[ArgumentSlot, ...]:
    return tuple(compile_slot(spec) for spec in specs)


def match_arguments(
    slots: Sequence[ArgumentSlot],
    args: Sequence[str],
    *,
    debug: bool = False,
) -> dict[str, ArgumentValue]:
    """
    Bind invocation arguments to slots in a single greedy left-to-right pass.

    Optional slots take a value whenever one is left and variadic slots take everything that
    is left, so later slots may starve. There is no backtracking.
    """

    bindings: dict[str, ArgumentValue] = {}
    cursor = 0
    total = len(args)

    for slot in slots:
        remaining = total - cursor
        quantifier = slot.quantifier
        if quantifier is Quantifier.REQUIRED:
            if remaining == 0:
                if debug:
                    logger.debug("slot %r: required, no input left", slot.name)
                raise MissingArgumentError(slot.name)
            bindings[slot.name] = Single(args[cursor])
            cursor += 1
        elif quantifier is Quantifier.OPTIONAL_ONE:
            if remaining == 0:
                bindings[slot.name] = Single(None)
            else:
                bindings[slot.name] = Single(args[cursor])
                cursor += 1
        elif quantifier.is_variadic:
            if quantifier is Quantifier.VARIADIC_AT_LEAST_ONE and remaining == 0:
                if debug:
                    logger.debug("slot %r: needs at least one value, no input left", slot.name)
                raise MissingArgumentError(slot.name)
            bindings[slot.name] = Many(tuple(args[cursor:]))
            cursor = total
        else:  # pragma: no cover
            raise AssertionError(f"unhandled quantifier: {quantifier!r}")

        if debug:
            logger.debug(
                "slot %r (%s): bound %r",
                slot.name,
                quantifier.name,
                bindings[slot.name],
            )

    if cursor < total:
        if debug:
            logger.debug("%d argument(s) left after the last slot", total - cursor)
        raise TooManyArgumentsError(args[cursor:])
    return bindings
