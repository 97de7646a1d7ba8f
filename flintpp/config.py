"""
Configuration system for the style checker.

Supports YAML and JSON configuration files. Values given on the command
line override values read from a file.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from flintpp.core.findings import Severity
from flintpp.core.ignored import PAUSE_MARKER, RESUME_MARKER
from flintpp.exceptions import ConfigError


# Default configuration file names to search for
CONFIG_FILE_NAMES = [
    ".flintpp.yaml",
    ".flintpp.yml",
    ".flintpp.json",
]


@dataclass
class LintConfig:
    """
    Main configuration for the style checker.

    Example YAML config:

    ```yaml
    recursive: true
    c_mode: false
    json: false
    level: 1          # 0: errors, 1: errors & warnings, 2: all
    jobs: 4
    pause_marker: "// %flint: pause"
    resume_marker: "// %flint: resume"
    disabled_rules:
      - FLINT-006
    ```
    """
    recursive: bool = False
    c_mode: bool = False
    json: bool = False
    level: int = int(Severity.ADVICE)
    jobs: int = 4
    pause_marker: str = PAUSE_MARKER
    resume_marker: str = RESUME_MARKER
    disabled_rules: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.level = int(Severity.clamp(self.level))

    @property
    def threshold(self) -> Severity:
        return Severity(self.level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary."""
        return asdict(self)

    def to_engine_config(self) -> Dict[str, Any]:
        """Convert to engine configuration format."""
        return {
            "recursive": self.recursive,
            "c_mode": self.c_mode,
            "jobs": self.jobs,
            "pause_marker": self.pause_marker,
            "resume_marker": self.resume_marker,
            "disabled_rules": list(self.disabled_rules),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LintConfig":
        """Create config from a dictionary."""
        data = dict(data)

        # Map the long command-line names
        if "cmode" in data:
            data["c_mode"] = data.pop("cmode")
        if "disabled" in data:
            data["disabled_rules"] = data.pop("disabled")

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        try:
            return cls(**filtered_data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    content = path.read_text(encoding="utf-8")

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_lint_config(path: Optional[str] = None, start_dir: str = ".") -> LintConfig:
    """
    Load a LintConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return LintConfig()

    return LintConfig.from_dict(load_config(path))
