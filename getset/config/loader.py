import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import (
    CommandEntry,
    Config,
    ConfigError,
    PlatformXConfig,
    UnsupportedConfigFormatError,
)

_ENTRY_KEYS = {"title", "command"}
_PLATFORMX_KEYS = {"secret_key", "event_namespace"}


def load_config(path: str | Path) -> Config:
    pure_path = Path(path).expanduser()

    fmt = _detect_format(pure_path)

    try:
        text = pure_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Error reading file '{pure_path}': {exc}") from exc

    return loads_config(text, fmt)


def loads_config(text: str, fmt: str = "toml") -> Config:
    raw = _parse_text(text, fmt)
    return _build_config(raw)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".toml":
            return "toml"
        case ".yaml" | ".yml":
            return "yaml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .toml, .yml/.yaml, .json"
            )


def _parse_text(text: str, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "toml":
            return _parse_toml(text)
        case "yaml":
            return _parse_yaml(text)
        case "json":
            return _parse_json(text)
        case _:
            raise UnsupportedConfigFormatError(f"Unknown config format: {fmt}")


def _parse_toml(text: str) -> Mapping[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Error parsing TOML: {exc}") from exc


def _parse_yaml(text: str) -> Mapping[str, Any]:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Error parsing YAML: {exc}") from exc

    if not isinstance(raw, Mapping):
        raise ConfigError(
            f"Error parsing YAML: top-level value is not an object: {type(raw)}"
        )

    return raw


def _parse_json(text: str) -> Mapping[str, Any]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Error parsing JSON: {exc}") from exc

    if not isinstance(raw, Mapping):
        raise ConfigError(
            f"Error parsing JSON: top-level value is not an object: {type(raw)}"
        )

    return raw


def _build_config(raw: Mapping[str, Any]) -> Config:
    if "commands" not in raw:
        raise ConfigError("Missing 'commands' field")

    if not isinstance(raw["commands"], list):
        raise ConfigError(f"'commands' must be a list, got {type(raw['commands'])}")

    commands = [
        _build_command_entry(index, fields)
        for index, fields in enumerate(raw["commands"], start=1)
    ]

    platformx = None
    if "platformx" in raw:
        platformx = _build_platformx_config(raw["platformx"])

    return Config(commands=commands, platformx=platformx)


def _build_command_entry(index: int, fields: Any) -> CommandEntry:
    where = f"commands[{index}]"

    if not isinstance(fields, Mapping):
        raise ConfigError(f"{where} must be a mapping")

    for key in fields.keys():
        if key not in _ENTRY_KEYS:
            raise ConfigError(f"{where}: Can't process: {key}")

    if "title" not in fields:
        raise ConfigError(f"{where}: missing 'title'")

    if not isinstance(fields["title"], str):
        raise ConfigError(f"{where}: The title should be a string")

    title = fields["title"].strip()

    if len(title) < 1:
        raise ConfigError(f"{where}: A title can't be empty")

    if "command" not in fields:
        raise ConfigError(f"{title}: missing 'command'")

    if not isinstance(fields["command"], str):
        raise ConfigError(f"{title}: The command should be a string")

    # Passed to the shell verbatim, multi-line scripts included
    command = fields["command"]

    if len(command.strip()) < 1:
        raise ConfigError(f"{title}: Command missing")

    return CommandEntry(title=title, command=command)


def _build_platformx_config(fields: Any) -> PlatformXConfig:
    if not isinstance(fields, Mapping):
        raise ConfigError("platformx: must be a mapping")

    for key in fields.keys():
        if key not in _PLATFORMX_KEYS:
            raise ConfigError(f"platformx: Can't process: {key}")

    if "secret_key" not in fields:
        raise ConfigError("platformx: missing 'secret_key'")

    if not isinstance(fields["secret_key"], str):
        raise ConfigError("platformx: The secret_key should be a string")

    namespace = fields.get("event_namespace")
    if namespace is not None and not isinstance(namespace, str):
        raise ConfigError("platformx: The event_namespace should be a string")

    return PlatformXConfig(secret_key=fields["secret_key"], event_namespace=namespace)
