"""
Configuration for the complexity analyzer.

Values come from built-in defaults, then an optional YAML or JSON file,
then command-line flags. Example ``.gocyclo.yaml``:

```yaml
over: 10
top: 20
avg: true
jobs: 8
format: text
exclude:
  - "vendor/**"
  - "*_test.go"
```
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from gocyclo.core.errors import ConfigError


CONFIG_FILE_NAMES = [
    ".gocyclo.yaml",
    ".gocyclo.yml",
    ".gocyclo.json",
]

OUTPUT_FORMATS = ("text", "json")

DEFAULT_CONFIG: Dict[str, Any] = {
    "over": 0,
    "top": None,
    "avg": False,
    "jobs": 4,
    "format": "text",
    "exclude": [],
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class Config:
    data: Dict[str, Any]

    @classmethod
    def load(cls, path: str | None) -> "Config":
        if not path:
            return cls(dict(DEFAULT_CONFIG))
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"config file not found: {path}")
        try:
            raw = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"cannot read config file {path}: {exc}") from exc
        try:
            if config_path.suffix.lower() == ".json":
                overrides = json.loads(raw)
            else:
                overrides = yaml.safe_load(raw) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ConfigError(f"invalid config file {path}: {exc}") from exc
        if not isinstance(overrides, dict):
            raise ConfigError(f"config file {path} must contain a mapping")
        config = cls(_deep_merge(DEFAULT_CONFIG, overrides))
        config.validate()
        return config

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a copy with every non-None override applied."""
        present = {key: value for key, value in overrides.items() if value is not None}
        config = Config(_deep_merge(self.data, present))
        config.validate()
        return config

    def validate(self) -> None:
        for key in ("over", "jobs"):
            value = self.data.get(key)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"'{key}' must be an integer, got {value!r}")
        top = self.data.get("top")
        if top is not None and (not isinstance(top, int) or isinstance(top, bool)):
            raise ConfigError(f"'top' must be an integer or null, got {top!r}")
        if not isinstance(self.data.get("avg", False), bool):
            raise ConfigError(f"'avg' must be true or false, got {self.data.get('avg')!r}")
        if self.jobs() < 1:
            raise ConfigError("'jobs' must be at least 1")
        if self.output_format() not in OUTPUT_FORMATS:
            raise ConfigError(
                f"'format' must be one of {', '.join(OUTPUT_FORMATS)}, got {self.output_format()!r}"
            )
        if not isinstance(self.data.get("exclude", []), list):
            raise ConfigError("'exclude' must be a list of glob patterns")

    def over(self) -> int:
        return self.data.get("over", 0)

    def top(self) -> Optional[int]:
        top = self.data.get("top")
        if top is None or top < 0:
            return None
        return top

    def show_average(self) -> bool:
        return bool(self.data.get("avg", False))

    def jobs(self) -> int:
        return self.data.get("jobs", 4)

    def output_format(self) -> str:
        return self.data.get("format", "text")

    def exclude_patterns(self) -> List[str]:
        return list(self.data.get("exclude") or [])


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.is_file():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent
