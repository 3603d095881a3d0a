"""User settings loaded from YAML."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from core.cli_errors import ConfigError

from .constants import config_paths

LOG = logging.getLogger(__name__)

_TRUE = ("on", "yes", "true", "1")
_FALSE = ("off", "no", "false", "0")


def _require_yaml():
    try:
        import yaml  # type: ignore

        return yaml
    except Exception as exc:  # pragma: no cover - runtime guard
        raise RuntimeError("PyYAML not installed. Run: pip install pyyaml") from exc


def _coerce_bool(key: str, v: Any) -> bool:
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ConfigError(f"Setting '{key}' must be a boolean, got {v!r}")


@dataclass
class Settings:
    auto_decline: bool = False
    echo_commands: bool = True
    prompt: str = "> "
    log_level: str = "WARNING"

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Settings":
        """Build settings from a loose mapping; dashed keys are accepted, unknown keys ignored."""
        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for raw_key, value in (data or {}).items():
            key = str(raw_key).strip().replace("-", "_").lower()
            if key not in known:
                LOG.debug("ignoring unknown setting %r", raw_key)
                continue
            if value is None:
                continue
            if known[key].type in (bool, "bool"):
                kwargs[key] = _coerce_bool(key, value)
            else:
                kwargs[key] = str(value)
        return cls(**kwargs)


def find_config(explicit: Optional[str] = None) -> Optional[Path]:
    """Return the first existing settings file, or None."""
    if explicit:
        p = Path(os.path.expanduser(explicit))
        if not p.exists():
            raise ConfigError(f"Config file not found: {p}")
        return p
    for candidate in config_paths():
        p = Path(candidate)
        if p.exists():
            return p
    return None


def load_settings(explicit: Optional[str] = None) -> Settings:
    """Load settings from YAML; defaults when no file is found."""
    path = find_config(explicit)
    if path is None:
        return Settings()
    yaml = _require_yaml()
    try:
        text = path.read_text(encoding="utf-8")
        data = yaml.safe_load(text) if text.strip() else {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML in {path} must be a mapping (dict)")
    LOG.debug("loaded settings from %s", path)
    return Settings.from_mapping(data)
