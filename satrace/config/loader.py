"""YAML run configuration.

A run is described by the packaged ``default_config.yaml`` overlaid with an
optional user file; command-line flags are applied on top of that by the CLI.
"""

from __future__ import annotations

import importlib.resources as ir
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from satrace.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "default_config.yaml"
LOCAL_CONFIG_PATH = Path("config.yml")


def merge_config(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay ``overrides`` on ``defaults`` section by section.

    A key present in both as a mapping (``options``) is merged key by key;
    anything else in ``overrides`` replaces the default. Neither input is modified.
    """
    merged: Dict[str, Any] = dict(defaults)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = merge_config(current, value)
        merged[key] = value
    return merged


def _parse_mapping(text: str, source: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"{source}: invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping, got {type(data).__name__}")
    return data


def _default_text() -> str:
    return (ir.files("satrace.config") / DEFAULT_CONFIG_NAME).read_text(encoding="utf-8")


def load_default_config() -> Dict[str, Any]:
    return _parse_mapping(_default_text(), DEFAULT_CONFIG_NAME)


def load_config(user_path: Optional[Path] = None) -> Dict[str, Any]:
    """Packaged defaults, overlaid with ``user_path`` when given.

    Raises ConfigError when the user file is missing, unreadable, not a
    mapping, or its ``options`` section is not a mapping.
    """
    cfg = load_default_config()
    if user_path is not None:
        user_path = Path(user_path)
        try:
            text = user_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigError(f"config file not found: {user_path}") from None
        except OSError as e:
            raise ConfigError(f"cannot read {user_path}: {e}") from e
        cfg = merge_config(cfg, _parse_mapping(text, str(user_path)))
        log.info("config loaded: %s", user_path)
    if not isinstance(cfg.get("options") or {}, dict):
        raise ConfigError("'options' must be a mapping")
    return cfg


def write_default_config(path: Path, overwrite: bool = False) -> bool:
    """Copy the commented packaged defaults to ``path`` (``satrace init``).

    Returns False, leaving the file alone, when it exists and ``overwrite`` is off.
    """
    path = Path(path)
    if path.exists() and not overwrite:
        log.warning("%s already exists; use --force to replace it", path)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_default_text(), encoding="utf-8")
    log.info("config written: %s", path)
    return True
