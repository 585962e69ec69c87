"""Minification options for Assetmin.

This module turns the loosely-typed per-asset ``minify`` configuration
(a mapping of option names to values, usually strings) into typed option
records for a given asset kind. The conversion happens once, here, so the
rest of the pipeline never inspects raw configuration values.

Key components:
- AssetKind: Enumeration of the asset kinds the pipeline understands.
- ScriptOptions / StylesheetOptions: Typed option records.
- resolve_options: Build the option record for an asset kind.
- gzip_enabled: Evaluate the ``gzip`` flag of a configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

MinifyConfiguration = Mapping[str, Any]


class AssetKind(Enum):
    """Kind of asset, derived from the output file extension."""

    SCRIPT = "script"
    STYLESHEET = "stylesheet"
    UNRECOGNIZED = "unrecognized"


_EXTENSION_KINDS = {
    ".js": AssetKind.SCRIPT,
    ".css": AssetKind.STYLESHEET,
}

# Stylesheet comment modes
COMMENT_MODE_IMPORTANT = "important"
COMMENT_MODE_NONE = "none"


@dataclass(frozen=True)
class ScriptOptions:
    """Options for minifying a script.

    Attributes:
        keep_important_comments: Keep ``/*! ... */`` license comments.
        term_semicolons: Terminate the output with a semicolon.
        gzip: Whether a gzip copy should be produced.
    """

    keep_important_comments: bool = True
    term_semicolons: bool = False
    gzip: bool = False


@dataclass(frozen=True)
class StylesheetOptions:
    """Options for minifying a stylesheet.

    Attributes:
        keep_important_comments: Keep ``/*! ... */`` comments (comment mode
            ``important``); drop every comment otherwise (``none``).
        term_semicolons: Keep a semicolon after the last declaration of each block.
        gzip: Whether a gzip copy should be produced.
    """

    keep_important_comments: bool = True
    term_semicolons: bool = False
    gzip: bool = False


EngineOptions = ScriptOptions | StylesheetOptions


def asset_kind_for(path: Path | str) -> AssetKind:
    """Determine the asset kind of a file from its extension.

    Args:
        path: Path to the output file.

    Returns:
        The matching AssetKind, UNRECOGNIZED for anything else.
    """
    return _EXTENSION_KINDS.get(Path(path).suffix.lower(), AssetKind.UNRECOGNIZED)


def option_equals(config: MinifyConfiguration, key: str, expected: str) -> bool:
    """Check whether an option is present and equals a value, ignoring case.

    Values are compared through their string form, so a YAML ``true``
    matches ``"true"``.
    """
    if key not in config or config[key] is None:
        return False
    return str(config[key]).lower() == expected.lower()


def gzip_enabled(config: MinifyConfiguration) -> bool:
    """Return True if the configuration asks for a gzip copy.

    Only a case-insensitive ``"true"`` enables it; ``"1"`` or ``"yes"`` do not.
    """
    return option_equals(config, "gzip", "true")


def _flag(config: MinifyConfiguration, key: str, default: bool) -> bool:
    if key not in config or config[key] is None:
        return default
    return option_equals(config, key, "true")


def _script_options(config: MinifyConfiguration) -> ScriptOptions:
    return ScriptOptions(
        keep_important_comments=_flag(config, "preserveImportantComments", True),
        term_semicolons=_flag(config, "termSemicolons", False),
        gzip=gzip_enabled(config),
    )


def _stylesheet_options(config: MinifyConfiguration) -> StylesheetOptions:
    keep_comments = not option_equals(config, "commentMode", COMMENT_MODE_NONE)
    return StylesheetOptions(
        keep_important_comments=keep_comments,
        term_semicolons=_flag(config, "termSemicolons", False),
        gzip=gzip_enabled(config),
    )


def resolve_options(kind: AssetKind, config: MinifyConfiguration) -> EngineOptions:
    """Resolve the typed options for an asset kind.

    Unknown keys are ignored and absent keys fall back to defaults, so
    resolution never fails for a recognized kind.

    Args:
        kind: Asset kind being minified.
        config: Raw minify configuration of the build unit.

    Returns:
        ScriptOptions or StylesheetOptions.

    Raises:
        ValueError: If kind is AssetKind.UNRECOGNIZED.
    """
    if kind is AssetKind.SCRIPT:
        return _script_options(config)
    elif kind is AssetKind.STYLESHEET:
        return _stylesheet_options(config)
    raise ValueError(f"No minification options for asset kind: {kind.value}")
