"""Gzip compression stage for Assetmin.

Produces a gzip copy of a minified artifact next to it (``app.min.js.gz``).
The stage is gated by the resolved ``gzip`` option of the build unit: when
disabled it does nothing and publishes no notifications at all; when enabled
it always publishes its before/after pair and writes the copy if the minified
content changed or the gzip file does not exist yet. The ``changed`` flag of
the gzip notifications tells whether the gzip file is actually written.
"""

from __future__ import annotations

import gzip
import shutil
from pathlib import Path

from .errors import ArtifactWriteError
from .events import EventNotifier, LifecycleChannel
from .naming import gzip_path_for
from .options import EngineOptions


class GzipStage:
    """Writes gzip copies of minified artifacts.

    Attributes:
        notifier: Receives the before/after gzip notifications.
    """

    def __init__(self, notifier: EventNotifier):
        self.notifier = notifier

    def maybe_gzip(
        self, options: EngineOptions, min_file: Path, changed: bool
    ) -> Path | None:
        """Write ``min_file + ".gz"`` if the options enable gzip.

        Args:
            options: Resolved options of the build unit.
            min_file: Minified artifact to compress.
            changed: Whether the minified artifact changed in this run.

        Returns:
            Path of the gzip artifact, or None when gzip is disabled.

        Raises:
            ArtifactWriteError: If the gzip file cannot be written.
        """
        if not options.gzip:
            return None

        gzip_file = gzip_path_for(min_file)
        write = changed or not gzip_file.exists()
        self.notifier.publish(
            LifecycleChannel.BEFORE_WRITE_GZIP_FILE, min_file, gzip_file, write
        )

        if write:
            try:
                with open(min_file, "rb") as f_in, gzip.open(gzip_file, "wb") as f_out:
                    shutil.copyfileobj(f_in, f_out)
            except OSError as exc:
                raise ArtifactWriteError(gzip_file, exc) from exc

        self.notifier.publish(
            LifecycleChannel.AFTER_WRITE_GZIP_FILE, min_file, gzip_file, write
        )
        return gzip_file
