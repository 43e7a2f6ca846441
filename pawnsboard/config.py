"""Game configuration.

Settings come from, in increasing precedence: model defaults, an optional
YAML file, and ``PAWNSBOARD_*`` environment variables. The CLI applies its
own flags on top.

Environment overrides:
    PAWNSBOARD_ROWS, PAWNSBOARD_COLUMNS, PAWNSBOARD_HAND_SIZE,
    PAWNSBOARD_DECK, PAWNSBOARD_SEED, PAWNSBOARD_SHUFFLE
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

__all__ = ["ControllerKind", "GameConfig", "load_config"]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_ENV_KEYS = {
    "PAWNSBOARD_ROWS": "rows",
    "PAWNSBOARD_COLUMNS": "columns",
    "PAWNSBOARD_HAND_SIZE": "starting_hand_size",
    "PAWNSBOARD_DECK": "deck_path",
    "PAWNSBOARD_SEED": "seed",
    "PAWNSBOARD_SHUFFLE": "shuffle",
}


class ControllerKind(str, Enum):
    """Who drives a side of the board."""
    HUMAN = "human"
    RANDOM = "random"


class GameConfig(BaseModel):
    """Settings for one game session."""
    rows: int = Field(3, gt=0)
    columns: int = Field(5, gt=1)
    starting_hand_size: int = Field(5, ge=0)
    deck_path: Optional[Path] = None
    shuffle: bool = True
    seed: Optional[int] = None
    red: ControllerKind = ControllerKind.RANDOM
    blue: ControllerKind = ControllerKind.RANDOM

    model_config = ConfigDict(extra="forbid")


def _read_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file: {e}", context={"path": str(path)}) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", context={"path": str(path)}) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a mapping", context={"path": str(path)}
        )
    return data


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_key, field_name in _ENV_KEYS.items():
        raw = environ.get(env_key)
        if raw is None or raw == "":
            continue
        if field_name == "shuffle":
            lowered = raw.strip().lower()
            if lowered in _TRUE_VALUES:
                overrides[field_name] = True
            elif lowered in _FALSE_VALUES:
                overrides[field_name] = False
            else:
                raise ConfigurationError(
                    f"{env_key} must be a boolean flag", config_key=field_name
                )
        else:
            overrides[field_name] = raw
    return overrides


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GameConfig:
    """Build a :class:`GameConfig` from ``path`` and the environment.

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid.
    """
    data: Dict[str, Any] = _read_yaml(path) if path is not None else {}
    data.update(_env_overrides(os.environ if environ is None else environ))
    try:
        return GameConfig(**data)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(
            f"Invalid configuration value for {key}: {first['msg']}", config_key=key
        ) from e
