"""Protocol definitions for Assetmin.

This module defines the interfaces (protocols) the pipeline depends on,
so the minification engine and the lifecycle observers can be swapped
without touching the artifact writer.

These protocols enable:
- Plugging in a different minifier (a native binding, a subprocess, a fake in tests)
- Observers such as loggers or editor integrations that react to artifact writes
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .engines import MinificationResult
    from .events import MinifyFileEvent
    from .options import AssetKind, EngineOptions


@runtime_checkable
class MinificationEngine(Protocol):
    """Protocol for minifying the text of an asset.

    Implementations must be side-effect free and must not raise for
    malformed input; defects are reported as error diagnostics instead.
    """

    @abstractmethod
    def minify(
        self,
        kind: AssetKind,
        source_text: str,
        options: EngineOptions,
        file_name: str = "",
    ) -> MinificationResult:
        """Minify source text.

        Args:
            kind: Asset kind of the source.
            source_text: Text to minify.
            options: Typed options for the kind.
            file_name: Name used in diagnostics.

        Returns:
            Result holding the minified text (None on failure) and diagnostics.
        """
        ...


@runtime_checkable
class MinifyObserver(Protocol):
    """Protocol for objects observing every lifecycle channel.

    Register with ``EventNotifier.subscribe_all``.
    """

    @abstractmethod
    def before_write_min_file(self, event: MinifyFileEvent) -> None: ...

    @abstractmethod
    def after_write_min_file(self, event: MinifyFileEvent) -> None: ...

    @abstractmethod
    def before_write_gzip_file(self, event: MinifyFileEvent) -> None: ...

    @abstractmethod
    def after_write_gzip_file(self, event: MinifyFileEvent) -> None: ...
