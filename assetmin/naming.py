"""Artifact naming for Assetmin.

Derived artifact names are a pure function of the source output file name:
``app.js`` becomes ``app.min.js`` and its gzip copy ``app.min.js.gz``.
No filesystem access happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

MIN_MARKER = ".min"
GZIP_SUFFIX = ".gz"


@dataclass(frozen=True)
class ArtifactPaths:
    """Paths of a source output file and its derived artifacts."""

    source_file: Path
    min_file: Path
    gzip_file: Path


def min_path_for(source: Path | str) -> Path:
    """Return the minified artifact path for a source output file.

    ``.min`` is inserted before the last extension. A name without an
    extension gets ``.min`` appended.

    Examples:
        >>> min_path_for("dist/app.js")
        PosixPath('dist/app.min.js')

        >>> min_path_for("LICENSE")
        PosixPath('LICENSE.min')
    """
    source = Path(source)
    return source.with_name(f"{source.stem}{MIN_MARKER}{source.suffix}")


def gzip_path_for(min_file: Path | str) -> Path:
    """Return the gzip artifact path for a minified file."""
    min_file = Path(min_file)
    return min_file.with_name(min_file.name + GZIP_SUFFIX)


def artifact_paths(source: Path | str) -> ArtifactPaths:
    min_file = min_path_for(source)
    return ArtifactPaths(Path(source), min_file, gzip_path_for(min_file))
