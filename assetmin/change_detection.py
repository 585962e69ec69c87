"""Change detection for Assetmin artifacts.

Artifacts are written as UTF-8 with a byte order mark. Comparison reads the
existing file with the same codec, so the BOM is treated as framing and only
the text content is compared.
"""

from __future__ import annotations

from pathlib import Path

ARTIFACT_ENCODING = "utf-8-sig"


def has_changed(target: Path, candidate: str) -> bool:
    """Check whether candidate content differs from a file on disk.

    A missing target counts as changed. So does a target that cannot be
    read or decoded (permission denied, a directory in its place, invalid
    UTF-8): the artifact is regenerated rather than the error propagated.

    Args:
        target: Artifact path to compare against.
        candidate: Newly produced content.

    Returns:
        True if the artifact needs to be written.
    """
    if not target.exists():
        return True
    try:
        with open(target, encoding=ARTIFACT_ENCODING, newline="") as f:
            existing = f.read()
    except (OSError, UnicodeDecodeError):
        return True
    return existing != candidate
