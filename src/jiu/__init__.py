from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

from jiu.arguments import (
    ArgumentSlot,
    Many,
    Quantifier,
    Single,
    compile_slot,
    match_arguments,
)
from jiu.config import Config, Recipe, load_config, locate_config
from jiu.errors import (
    ConfigError,
    EmptyCommandError,
    ExecutionError,
    InterpolationError,
    JiuError,
    MatchError,
    MissingArgumentError,
    PlaceholderQuantifierError,
    ResolveError,
    TooManyArgumentsError,
    UndefinedEnvironmentVariableError,
    UnknownArgumentError,
    UnknownRecipeError,
)
from jiu.resolver import (
    RecipeListing,
    ResolutionContext,
    ResolvedCommand,
    list_recipes,
    resolve,
)
from jiu.template import Literal, Placeholder, check_placeholders, interpolate


def _resolve_version() -> str:
    try:
        return package_version("jiu")
    except PackageNotFoundError:
        return "0+unknown"


__version__ = _resolve_version()

__all__ = [
    "__version__",
    "ArgumentSlot",
    "Config",
    "ConfigError",
    "EmptyCommandError",
    "ExecutionError",
    "InterpolationError",
    "JiuError",
    "Literal",
    "Many",
    "MatchError",
    "MissingArgumentError",
    "Placeholder",
    "PlaceholderQuantifierError",
    "Quantifier",
    "Recipe",
    "RecipeListing",
    "ResolutionContext",
    "ResolveError",
    "ResolvedCommand",
    "Single",
    "TooManyArgumentsError",
    "UndefinedEnvironmentVariableError",
    "UnknownArgumentError",
    "UnknownRecipeError",
    "check_placeholders",
    "compile_slot",
    "interpolate",
    "list_recipes",
    "load_config",
    "locate_config",
    "match_arguments",
    "resolve",
]
