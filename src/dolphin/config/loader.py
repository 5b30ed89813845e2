from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from dolphin.config.models import DolphinConfig, ResolvedConfig
from dolphin.constants import DEFAULT_CONFIG_DIR
from dolphin.errors import ConfigError

CONFIG_PATH_ENVS = ("DOLPHIN_CONFIG", "DOLPHIN_CONFIG_FILE")


def _default_config_dir() -> Path:
    return Path(DEFAULT_CONFIG_DIR).expanduser()


def default_config_candidates() -> list[Path]:
    base = _default_config_dir()
    return [
        base / "config.yml",
        base / "config.yaml",
        base / "config.toml",
        base / "config.json",
    ]


def _decode_raw(raw: str, *, suffix: str) -> dict[str, Any]:
    if suffix in {".yaml", ".yml", ""}:
        parsed = yaml.safe_load(raw) or {}
    elif suffix == ".json":
        parsed = json.loads(raw)
    elif suffix == ".toml":
        parsed = tomllib.loads(raw)
    else:
        raise ConfigError(f"unsupported config extension: {suffix}")

    if not isinstance(parsed, dict):
        raise ConfigError("config must decode to an object/map")
    return parsed


def parse_config_file(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    return _decode_raw(raw, suffix=path.suffix.lower())


def _load_from_path(path: Path, *, source: str) -> ResolvedConfig:
    try:
        payload = parse_config_file(path)
    except (OSError, ValueError, yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"failed to parse config file '{path}': {exc}") from exc

    try:
        data = DolphinConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config structure for '{path}': {exc}") from exc

    return ResolvedConfig(source=source, path=path.resolve(), data=data)


def load_config(config_path: str | Path | None = None) -> ResolvedConfig:
    """Load the config file: explicit path, then ``$DOLPHIN_CONFIG``, then the default locations."""

    if config_path is not None:
        path = Path(config_path).expanduser().resolve()
        if not path.exists():
            raise ConfigError(f"config file not found: {path}")
        return _load_from_path(path, source="explicit-path")

    for env_name in CONFIG_PATH_ENVS:
        env_path = os.getenv(env_name)
        if not env_path:
            continue
        path = Path(env_path).expanduser().resolve()
        if not path.exists():
            raise ConfigError(f"config file from {env_name} not found: {path}")
        return _load_from_path(path, source=f"env:{env_name}")

    for candidate in default_config_candidates():
        if candidate.exists():
            return _load_from_path(candidate.expanduser().resolve(), source="default-path")

    return ResolvedConfig(source="built-in", data=DolphinConfig())
