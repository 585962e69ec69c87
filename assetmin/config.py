"""Build unit configuration for Assetmin.

A build unit is one source output file plus its ``minify`` options. Units are
usually listed in a project config file (``assetmin.yaml``), either as a
top-level list or under a ``units`` key:

    - outputFile: dist/app.js
      minify:
        gzip: true
    - outputFile: dist/site.css

JSON files in the same shape are accepted too, since YAML is a superset of
JSON. ``outputFile`` is resolved relative to the config file's directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .options import option_equals

DEFAULT_CONFIG_NAME = "assetmin.yaml"

DEFAULT_MINIFY = {
    "enabled": True,
    "gzip": False,
}


class ConfigError(Exception):
    """Error loading a config file.

    Attributes:
        config_path: Path to the config file.
        message: Human-readable error message.
    """

    def __init__(self, config_path: Path, message: str):
        self.config_path = config_path
        self.message = message
        super().__init__(f"{config_path}: {message}")


@dataclass
class BuildUnit:
    """One invocation target of the pipeline.

    Attributes:
        output_file: Absolute path of the compiled output file to minify.
        minify: Raw minify options (option name to value).
    """

    output_file: Path
    minify: dict[str, Any] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return not option_equals(self.minify, "enabled", "false")


def load_build_units(config_path: Path) -> list[BuildUnit]:
    """Load build units from a YAML or JSON config file.

    Args:
        config_path: Path to the config file.

    Returns:
        List of build units with DEFAULT_MINIFY merged beneath each entry's options.

    Raises:
        ConfigError: If the file is missing, unparseable, or malformed.
    """
    if not config_path.exists():
        raise ConfigError(config_path, "config file not found")
    try:
        with open(config_path, encoding="utf-8-sig") as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(config_path, f"invalid YAML: {exc}") from exc

    if loaded is None:
        return []
    if isinstance(loaded, dict):
        if "units" not in loaded:
            raise ConfigError(config_path, "expected a list of build units")
        loaded = loaded["units"] or []
    if not isinstance(loaded, list):
        raise ConfigError(config_path, "expected a list of build units")

    base_dir = config_path.absolute().parent
    units = []
    for index, entry in enumerate(loaded):
        units.append(_parse_unit(config_path, base_dir, index, entry))
    return units


def _parse_unit(config_path: Path, base_dir: Path, index: int, entry: Any) -> BuildUnit:
    if not isinstance(entry, dict) or not entry.get("outputFile"):
        raise ConfigError(config_path, f"unit {index} has no outputFile")
    minify = entry.get("minify") or {}
    if not isinstance(minify, dict):
        raise ConfigError(config_path, f"unit {index}: minify must be a mapping")
    options = DEFAULT_MINIFY.copy()
    options.update(minify)
    return BuildUnit(output_file=base_dir / str(entry["outputFile"]), minify=options)
