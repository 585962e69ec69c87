"""Errors raised by the Assetmin pipeline.

Both errors are fatal for the build unit that raised them and are never
retried; artifacts written earlier in the same unit are left in place.
"""

from __future__ import annotations

from pathlib import Path


class MissingSourceError(FileNotFoundError):
    """The source output file of a build unit does not exist.

    Attributes:
        source_path: The missing file.
    """

    def __init__(self, source_path: Path):
        self.source_path = source_path
        super().__init__(f"Source output file not found: {source_path}")


class ArtifactWriteError(Exception):
    """Error writing a derived artifact.

    Attributes:
        target_path: Artifact that could not be written.
        original_error: The OSError that was raised.
    """

    def __init__(self, target_path: Path, original_error: OSError):
        self.target_path = target_path
        self.original_error = original_error
        super().__init__(f"{target_path}: could not write artifact ({original_error})")
