from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from jiu.arguments import ArgumentSlot, Quantifier, compile_slot, compile_slots
from jiu.errors import ConfigError
from jiu.template import ENV_PREFIX, CommandToken, Literal, Placeholder

CONFIG_FILENAMES: tuple[str, ...] = (".jiu.toml", ".jiu.yaml", ".jiu.yml")
_SCHEMA_PATH = Path(__file__).with_name("config.schema.json")


@dataclass(frozen=True)
class Recipe:
    names: tuple[str, ...]
    arguments: tuple[ArgumentSlot, ...]
    command: tuple[CommandToken, ...]
    description: str | None = None

    @property
    def name(self) -> str:
        return self.names[0]


@dataclass(frozen=True)
class Config:
    root_dir: Path
    recipes: tuple[Recipe, ...] = ()
    description: str | None = None
    default: str | None = None
    source_path: Path | None = None


def locate_config(start: Path | None = None) -> Path:
    """Return the recipe file in `start` (default: cwd) or its closest parent that has one."""
    cur = (start or Path.cwd()).resolve()
    for candidate in [cur, *cur.parents]:
        for filename in CONFIG_FILENAMES:
            path = candidate / filename
            if path.is_file():
                return path
    names = ", ".join(CONFIG_FILENAMES)
    raise ConfigError(
        "No config file found",
        code="config_not_found",
        details={"start": str(cur), "filenames": list(CONFIG_FILENAMES)},
        hint=f"Create one of {names} in this directory or one of its parents.",
    )


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            f"Failed to read {path}: {e}",
            code="config_read_failed",
            details={"path": str(path), "error": str(e)},
        ) from e


def _load_toml(path: Path) -> Any:
    text = _read_text(path)
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(
            f"Failed to parse TOML in {path}: {e}",
            code="config_parse_failed",
            details={"path": str(path), "error": str(e)},
            hint="Fix the TOML syntax of the config file.",
        ) from e


def _load_yaml(path: Path) -> Any:
    text = _read_text(path)
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse YAML in {path}: {e}",
            code="config_parse_failed",
            details={"path": str(path), "error": str(e)},
            hint="Fix the YAML syntax of the config file.",
        ) from e
    if raw is None:
        return {}
    return raw


def load_schema() -> dict[str, Any]:
    raw = json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Schema must be a JSON object: {_SCHEMA_PATH}")
    return raw


def validate_config_data(data: Any, schema: dict[str, Any] | None = None) -> list[str]:
    validator = Draft202012Validator(schema if schema is not None else load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: str(e.path))
    formatted: list[str] = []
    for error in errors:
        path = "$"
        for part in error.path:
            path += f"[{part!r}]" if isinstance(part, int) else f".{part}"
        formatted.append(f"{path}: {error.message}")
    return formatted


def _parse_command_token(raw: str | list[str]) -> CommandToken:
    if isinstance(raw, str):
        return Literal(raw)
    text = raw[0]
    if text.startswith(ENV_PREFIX):
        return Placeholder(text)
    slot = compile_slot(text)
    if slot.quantifier is Quantifier.REQUIRED:
        return Placeholder(text)
    return Placeholder(slot.name, quantifier=slot.quantifier)


def _parse_recipe(raw: Mapping[str, Any]) -> Recipe:
    description = raw.get("description")
    return Recipe(
        names=tuple(raw["names"]),
        arguments=compile_slots(raw.get("arguments") or []),
        command=tuple(_parse_command_token(item) for item in raw["command"]),
        description=description or None,
    )


def load_config_from_mapping(
    data: Any,
    *,
    root_dir: Path,
    source_path: Path | None = None,
) -> Config:
    if not isinstance(data, dict):
        where = str(source_path) if source_path is not None else "<config>"
        raise ConfigError(
            f"Expected a mapping at the root of {where}, got {type(data).__name__}.",
            code="config_not_mapping",
            details={"path": where, "type": type(data).__name__},
        )

    problems = validate_config_data(data)
    if problems:
        where = str(source_path) if source_path is not None else "<config>"
        raise ConfigError(
            f"Invalid config {where}:\n" + "\n".join(f"  {p}" for p in problems),
            code="config_schema_invalid",
            details={"path": where, "errors": problems},
            hint="Each recipe needs `names` and `command`; see the README for the file format.",
        )

    recipes = tuple(_parse_recipe(raw) for raw in data.get("recipes") or [])
    return Config(
        root_dir=root_dir,
        recipes=recipes,
        description=data.get("description") or None,
        default=data.get("default") or None,
        source_path=source_path,
    )


def load_config(path: Path) -> Config:
    """Load a `.jiu.toml`/`.jiu.yaml` file; its directory becomes the working directory."""
    resolved = path.resolve()
    if resolved.suffix in (".yaml", ".yml"):
        data = _load_yaml(resolved)
    else:
        data = _load_toml(resolved)
    return load_config_from_mapping(data, root_dir=resolved.parent, source_path=resolved)
