"""Optional YAML file holding default option values."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from harn.utils.durations import coerce_duration

logger = logging.getLogger(__name__)

CONFIG_ENV = "HARN_CONFIG"

_BOOL_KEYS = ("verbose", "silent", "generate", "force", "hash", "color", "strict")
_REPORT_FORMATS = ("terminal", "json")


class ConfigError(ValueError):
    """Raised when the defaults file cannot be used."""


@dataclass(frozen=True)
class HarnConfig:
    """Values from the defaults file; ``None`` means not set."""

    timeout: Optional[float] = None
    verbose: Optional[bool] = None
    silent: Optional[bool] = None
    generate: Optional[bool] = None
    force: Optional[bool] = None
    hash: Optional[bool] = None
    color: Optional[bool] = None
    strict: Optional[bool] = None
    report: Optional[str] = None
    report_path: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self) if getattr(self, item.name) is not None}


def resolve_config_path(explicit: Optional[str]) -> Optional[Path]:
    if explicit:
        return Path(explicit)
    env_value = os.environ.get(CONFIG_ENV)
    if env_value:
        return Path(env_value)
    return None


def load_config(path: Optional[Path]) -> HarnConfig:
    """Load and validate the defaults file; no path yields an empty config."""

    if path is None:
        return HarnConfig()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"config file {path} must contain a mapping")
    config = parse_config(raw)
    logger.debug("loaded defaults from %s: %s", path, config.as_dict())
    return config


def parse_config(raw: Mapping[str, Any]) -> HarnConfig:
    known = {item.name for item in fields(HarnConfig)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        name = str(key).replace("-", "_")
        if name not in known:
            raise ConfigError(f"unknown config key '{key}'")
        if value is None:
            continue
        if name == "timeout":
            try:
                values[name] = coerce_duration(value)
            except ValueError as exc:
                raise ConfigError(f"invalid timeout: {exc}") from exc
        elif name in _BOOL_KEYS:
            if not isinstance(value, bool):
                raise ConfigError(f"'{key}' must be true or false")
            values[name] = value
        elif name == "report":
            if value not in _REPORT_FORMATS:
                raise ConfigError(f"'report' must be one of {', '.join(_REPORT_FORMATS)}")
            values[name] = value
        else:
            values[name] = str(value)
    return HarnConfig(**values)
