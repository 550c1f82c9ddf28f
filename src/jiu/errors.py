from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class JiuError(ValueError):
    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message)
        normalized_code = code.strip() if isinstance(code, str) and code.strip() else "jiu_error"
        normalized_details = dict(details) if isinstance(details, dict) else {}
        if not normalized_details:
            normalized_details = {"reason": message}
        self.code = normalized_code
        self.details = normalized_details
        self.hint = hint.strip() if isinstance(hint, str) and hint.strip() else None


class ConfigError(JiuError):
    """The recipe file could not be located, read, parsed or validated."""


class ExecutionError(JiuError):
    """The resolved command could not be spawned."""


class ResolveError(JiuError):
    """Base class for failures while turning an invocation into a command."""


class UnknownRecipeError(ResolveError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f'Recipe "{name}" not found',
            code="unknown_recipe",
            details={"recipe": name},
            hint="Run `jiu --list` to see the available recipes.",
        )
        self.name = name


class EmptyCommandError(ResolveError):
    def __init__(self, recipe_name: str) -> None:
        super().__init__(
            f'Recipe "{recipe_name}" resolved to an empty command',
            code="empty_command",
            details={"recipe": recipe_name},
            hint="The first element of `command` must always produce the program to run.",
        )
        self.recipe_name = recipe_name


class MatchError(ResolveError):
    """The invocation arguments do not fit the recipe's declared arguments."""


class MissingArgumentError(MatchError):
    def __init__(self, slot_name: str) -> None:
        super().__init__(
            f'Missing value for argument "{slot_name}"',
            code="missing_argument",
            details={"argument": slot_name},
        )
        self.slot_name = slot_name


class TooManyArgumentsError(MatchError):
    def __init__(self, remaining: Sequence[str]) -> None:
        remaining_list = list(remaining)
        super().__init__(
            f"Unexpected argument(s): {remaining_list!r}",
            code="too_many_arguments",
            details={"remaining": remaining_list},
        )
        self.remaining = tuple(remaining_list)


class InterpolationError(ResolveError):
    """A command placeholder could not be substituted."""


class UndefinedEnvironmentVariableError(InterpolationError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f'Environment variable "{name}" is not set',
            code="undefined_environment_variable",
            details={"variable": name},
        )
        self.name = name


class UnknownArgumentError(InterpolationError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f'Argument "{name}" not found',
            code="unknown_argument",
            details={"argument": name},
            hint="Every `[name]` placeholder in `command` must name an entry of `arguments`.",
        )
        self.name = name


class PlaceholderQuantifierError(InterpolationError):
    """A placeholder symbol that disagrees with its argument, or sits on a `$NAME` lookup."""

    def __init__(self, placeholder: str, *, recipe_name: str, declared: str | None) -> None:
        if declared is None:
            message = (
                f'Placeholder "{placeholder}" in recipe "{recipe_name}" puts a symbol on an '
                "environment variable"
            )
            hint = "Write environment placeholders without a symbol, e.g. `[\"$HOME\"]`."
        else:
            message = (
                f'Placeholder "{placeholder}" in recipe "{recipe_name}" does not match '
                f'argument "{declared}"'
            )
            hint = "Write the placeholder with the same symbol as the argument, or as a bare name."
        super().__init__(
            message,
            code="placeholder_quantifier_mismatch",
            details={"recipe": recipe_name, "placeholder": placeholder, "declared": declared},
            hint=hint,
        )
        self.placeholder = placeholder
        self.recipe_name = recipe_name
        self.declared = declared
