"""Minification diagnostics for Assetmin.

This module defines the structured messages produced while minifying an
asset, and a reporter that keeps the current diagnostics per source file,
the way an editor error list does.

Key classes:
- Severity: Error or warning.
- MinificationDiagnostic: One message with file, line and column.
- DiagnosticsReporter: Per-file diagnostics store used by the CLI.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class MinificationDiagnostic:
    """A message produced while minifying a file.

    Attributes:
        file_name: File the message refers to.
        line: 1-based line number, 0 when unknown.
        column: 1-based column number, 0 when unknown.
        message: Human-readable description.
        is_warning: True for warnings, False for errors.
    """

    file_name: str
    line: int
    column: int
    message: str
    is_warning: bool = False

    @property
    def severity(self) -> Severity:
        return Severity.WARNING if self.is_warning else Severity.ERROR


class DiagnosticsReporter:
    """Keeps the latest diagnostics for each source file.

    Adding diagnostics for a file replaces whatever was reported for it
    before, so a rebuild that fixes an error clears it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_file: dict[str, list[MinificationDiagnostic]] = {}

    def add(self, file_name: str, diagnostics: Iterable[MinificationDiagnostic]) -> None:
        """Replace the diagnostics stored for a file.

        Args:
            file_name: Source file the diagnostics belong to.
            diagnostics: New diagnostics; an empty iterable clears the file.
        """
        items = list(diagnostics)
        with self._lock:
            self._by_file.pop(file_name, None)
            if items:
                self._by_file[file_name] = items

    def clean(self, file_name: str) -> None:
        with self._lock:
            self._by_file.pop(file_name, None)

    def clean_all(self) -> None:
        with self._lock:
            self._by_file.clear()

    def diagnostics_for(self, file_name: str) -> list[MinificationDiagnostic]:
        with self._lock:
            return list(self._by_file.get(file_name, []))

    def all(self) -> list[MinificationDiagnostic]:
        """Return every stored diagnostic, grouped by file in insertion order."""
        with self._lock:
            return [d for items in self._by_file.values() for d in items]

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.all())

    @staticmethod
    def format(diagnostic: MinificationDiagnostic) -> str:
        """Format a diagnostic as ``file(line,col): severity: message``."""
        return (
            f"{diagnostic.file_name}({diagnostic.line},{diagnostic.column}): "
            f"{diagnostic.severity.value}: {diagnostic.message}"
        )
