"""Artifact writer for Assetmin.

This module contains the core of the pipeline: for one build unit it reads
the source output file, minifies it, and persists the ``.min`` artifact (and
optionally its gzip copy) only when the content changed.

Per build unit, strictly in order:
1. Dispatch on the file extension; unrecognized kinds are a no-op.
2. Read the source output file; a missing file raises MissingSourceError.
3. Resolve options and minify.
4. Empty or failed output stops here: nothing is written or published.
5. Publish BEFORE_WRITE_MIN_FILE, write the artifact if changed,
   publish AFTER_WRITE_MIN_FILE.
6. Run the gzip stage with the resolved options and the same change state.

Key classes:
- FileMinifier: Runs build units against a notifier and an engine.
"""

from __future__ import annotations

from pathlib import Path

from .change_detection import ARTIFACT_ENCODING, has_changed
from .compression import GzipStage
from .config import BuildUnit
from .engines import MinificationResult, create_default_engine
from .errors import ArtifactWriteError, MissingSourceError
from .events import EventNotifier, LifecycleChannel
from .naming import min_path_for
from .options import AssetKind, MinifyConfiguration, asset_kind_for, resolve_options
from .protocols import MinificationEngine

__all__ = [
    "ArtifactWriteError",
    "FileMinifier",
    "MinificationResult",
    "MissingSourceError",
]


class FileMinifier:
    """Minifies build units and writes their artifacts.

    The notifier and engine are injected so several minifiers can share
    one set of subscribers, and tests can substitute the engine.

    Attributes:
        notifier (EventNotifier): Receives the lifecycle notifications.
        engine (MinificationEngine): Minifies text per asset kind.
        gzip_stage (GzipStage): Writes gzip copies of the artifacts.
    """

    def __init__(
        self,
        notifier: EventNotifier | None = None,
        engine: MinificationEngine | None = None,
    ):
        """Initialize the minifier.

        Args:
            notifier: Optional shared notifier; a private one is created otherwise.
            engine: Optional minification engine; defaults to rjsmin/rcssmin.
        """
        self.notifier = notifier or EventNotifier()
        self.engine = engine or create_default_engine()
        self.gzip_stage = GzipStage(self.notifier)

    def minify_file(self, unit: BuildUnit) -> MinificationResult | None:
        """Run the pipeline for one build unit.

        Args:
            unit: Source output file and its minify options.

        Returns:
            The minification result, or None if the file is not a script
            or stylesheet.

        Raises:
            MissingSourceError: If the source output file does not exist.
            ArtifactWriteError: If an artifact cannot be written.
        """
        return self.minify_path(unit.output_file, unit.minify)

    def minify_path(
        self, source_file: Path, config: MinifyConfiguration
    ) -> MinificationResult | None:
        """Run the pipeline for a source output file and a raw minify configuration."""
        source_file = Path(source_file)
        kind = asset_kind_for(source_file)
        if kind is AssetKind.UNRECOGNIZED:
            return None

        content = self._read_source(source_file)
        options = resolve_options(kind, config)
        result = self.engine.minify(kind, content, options, str(source_file))

        if not result.minified_text:
            return result

        min_file = min_path_for(source_file)
        changed = has_changed(min_file, result.minified_text)

        self.notifier.publish(
            LifecycleChannel.BEFORE_WRITE_MIN_FILE, source_file, min_file, changed
        )
        if changed:
            self._write_artifact(min_file, result.minified_text)
        self.notifier.publish(
            LifecycleChannel.AFTER_WRITE_MIN_FILE, source_file, min_file, changed
        )

        self.gzip_stage.maybe_gzip(options, min_file, changed)

        result.min_file = min_file
        result.changed = changed
        return result

    def _read_source(self, source_file: Path) -> str:
        try:
            with open(source_file, encoding=ARTIFACT_ENCODING, newline="") as f:
                return f.read()
        except FileNotFoundError as exc:
            raise MissingSourceError(source_file) from exc

    def _write_artifact(self, target: Path, text: str) -> None:
        """Write text as UTF-8 with a byte order mark."""
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding=ARTIFACT_ENCODING, newline="") as f:
                f.write(text)
        except OSError as exc:
            raise ArtifactWriteError(target, exc) from exc
