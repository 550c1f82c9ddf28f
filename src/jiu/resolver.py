from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from jiu.arguments import ArgumentSlot, match_arguments
from jiu.config import Config, Recipe
from jiu.errors import EmptyCommandError, UnknownRecipeError
from jiu.template import check_placeholders, interpolate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    debug: bool = False
    env_lookup: Callable[[str], str | None] = field(default=os.environ.get)


@dataclass(frozen=True)
class ResolvedCommand:
    program_and_args: tuple[str, ...]
    working_directory: Path
    recipe: Recipe


@dataclass(frozen=True)
class ListingEntry:
    names: tuple[str, ...]
    arguments: tuple[ArgumentSlot, ...]
    description: str | None


@dataclass(frozen=True)
class RecipeListing:
    entries: tuple[ListingEntry, ...]
    description: str | None = None


def list_recipes(config: Config) -> RecipeListing:
    return RecipeListing(
        entries=tuple(
            ListingEntry(names=r.names, arguments=r.arguments, description=r.description)
            for r in config.recipes
        ),
        description=config.description,
    )


def find_recipe(config: Config, name: str, *, debug: bool = False) -> Recipe:
    matches = [recipe for recipe in config.recipes if name in recipe.names]
    if not matches:
        raise UnknownRecipeError(name)
    if debug and len(matches) > 1:
        logger.debug(
            "recipe name %r is declared %d times; using the first, shadowing %r",
            name,
            len(matches),
            [r.names for r in matches[1:]],
        )
    return matches[0]


def resolve_recipe(
    config: Config,
    recipe: Recipe,
    args: Sequence[str],
    *,
    context: ResolutionContext | None = None,
) -> ResolvedCommand:
    ctx = context or ResolutionContext()
    check_placeholders(recipe.command, recipe.arguments, recipe_name=recipe.name)
    bindings = match_arguments(recipe.arguments, args, debug=ctx.debug)
    argv = interpolate(recipe.command, bindings, ctx.env_lookup)
    if not argv:
        raise EmptyCommandError(recipe.name)
    if ctx.debug:
        logger.debug("resolved command: %r (cwd=%s)", argv, config.root_dir)
    return ResolvedCommand(
        program_and_args=tuple(argv),
        working_directory=config.root_dir,
        recipe=recipe,
    )


def resolve(
    config: Config,
    invocation: Sequence[str],
    *,
    context: ResolutionContext | None = None,
) -> ResolvedCommand | RecipeListing:
    """
    Resolve `[recipe, *args]` against `config`.

    With an empty invocation the configured default recipe runs without arguments; when there
    is no default the recipe listing is returned instead of a command.
    """

    ctx = context or ResolutionContext()
    if not invocation:
        if config.default is None:
            if ctx.debug:
                logger.debug("no recipe requested and no default configured; listing recipes")
            return list_recipes(config)
        name, args = config.default, []
    else:
        name, args = invocation[0], list(invocation[1:])

    if ctx.debug:
        logger.debug("running recipe %r with arguments %r", name, args)
    recipe = find_recipe(config, name, debug=ctx.debug)
    return resolve_recipe(config, recipe, args, context=ctx)
