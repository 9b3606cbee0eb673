"""User configuration: ~/.itin/config.yaml plus ITIN_* environment overrides.

Resolution order (later wins): defaults, config file, environment, CLI flags.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaError

from itin.errors import ConfigError

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path.home() / ".itin" / "config.yaml"

# Environment variable -> settings field
_ENV_VARS = {
    "ITIN_API_URL": "api_url",
    "ITIN_API_TOKEN": "api_token",
    "ITIN_TIMEOUT": "timeout_s",
    "ITIN_CATALOG": "catalog_file",
}


class Settings(BaseModel):
    """Resolved settings."""

    api_url: Optional[str] = None
    api_token: Optional[str] = None
    timeout_s: float = Field(default=10.0, gt=0)
    catalog_file: Optional[str] = None
    sort_by: Optional[str] = None


def config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """Location of the config file (ITIN_CONFIG overrides the default)."""
    env = os.environ if env is None else env
    override = env.get("ITIN_CONFIG", "").strip()
    return Path(override) if override else _DEFAULT_CONFIG_PATH


def _read_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error in {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(raw).__name__}")
    return raw


def load_settings(
    path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Load settings from the config file, then apply environment overrides."""
    env = os.environ if env is None else env
    path = path or config_path(env)

    values = _read_file(path)
    for var, field_name in _ENV_VARS.items():
        value = env.get(var, "").strip()
        if value:
            values[field_name] = value

    try:
        return Settings(**values)
    except SchemaError as exc:
        lines = [f"Invalid configuration ({path}):"]
        for err in exc.errors():
            loc = " -> ".join(str(x) for x in err["loc"])
            lines.append(f"  {loc}: {err['msg']}")
        raise ConfigError("\n".join(lines)) from exc


def save_setting(key: str, value: str, path: Optional[Path] = None) -> Settings:
    """Set one key in the config file and return the resulting settings."""
    if key not in Settings.model_fields:
        valid = ", ".join(Settings.model_fields)
        raise ConfigError(f"Unknown setting: {key}. Valid: {valid}")

    path = path or config_path()
    values = _read_file(path)
    values[key] = value
    try:
        settings = Settings(**values)
    except SchemaError as exc:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from exc

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(values, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not write {path}: {exc}") from exc
    logger.debug("Wrote %s=%r to %s", key, value, path)
    return settings
