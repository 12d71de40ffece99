"""Settings loading with defaults and CLI override merging."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path

import yaml

from meal_calendar.display import MAX_ENTRIES_PER_DAY, MAX_NAME_LENGTH
from meal_calendar.window import DEFAULT_ANCHOR, get_day_index

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "meal-calendar" / "config.yaml"

DEFAULTS = {
    "server": {
        "url": "",
        "api_key": "",
        "timeout": 30.0,
    },
    "calendar": {
        "anchor_weekday": DEFAULT_ANCHOR,
    },
    "display": {
        "max_name_length": MAX_NAME_LENGTH,
        "max_entries_per_day": MAX_ENTRIES_PER_DAY,
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | None = None) -> dict:
    """Load settings from a YAML file, falling back to defaults."""
    config_path = config_path or DEFAULT_CONFIG_PATH

    if config_path.exists():
        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}
        return deep_merge(copy.deepcopy(DEFAULTS), user_config)

    return copy.deepcopy(DEFAULTS)


def apply_cli_overrides(config: dict, **overrides: object) -> dict:
    """Apply CLI argument overrides to config.

    Supports flat keys that map into nested config:
      url -> server.url
      api_key -> server.api_key
      anchor -> calendar.anchor_weekday
    """
    if overrides.get("url") is not None:
        config["server"]["url"] = overrides["url"]
    if overrides.get("api_key") is not None:
        config["server"]["api_key"] = overrides["api_key"]
    if overrides.get("anchor") is not None:
        config["calendar"]["anchor_weekday"] = str(overrides["anchor"]).strip().lower()

    return config


@dataclass(frozen=True)
class CalendarSettings:
    """Settings for one refresh, passed explicitly to each call."""
    base_url: str = ""
    api_key: str = ""
    anchor_weekday: int = get_day_index(DEFAULT_ANCHOR)
    max_name_length: int = MAX_NAME_LENGTH
    max_entries_per_day: int = MAX_ENTRIES_PER_DAY
    timeout: float = 30.0

    @classmethod
    def from_config(cls, config: dict) -> CalendarSettings:
        server = config.get("server", {})
        return cls(
            base_url=server.get("url") or "",
            api_key=server.get("api_key") or "",
            anchor_weekday=get_day_index(config["calendar"]["anchor_weekday"]),
            max_name_length=int(config["display"]["max_name_length"]),
            max_entries_per_day=int(config["display"]["max_entries_per_day"]),
            timeout=float(server.get("timeout", 30.0)),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url.strip()) and bool(self.api_key.strip())
