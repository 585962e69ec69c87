"""Minification engines for Assetmin.

This module contains the default implementations of the MinificationEngine
protocol. Each minifier handles a single asset kind and wraps an external
minification library:

- ScriptMinifier: Minifies JavaScript with rjsmin.
- StylesheetMinifier: Minifies CSS with rcssmin.
- MinifierRegistry: Dispatches to the minifier registered for a kind.

Neither library reports syntax errors, so every minifier first runs a
lexical scan (strings, comments, bracket balance) and refuses to minify
structurally broken input, returning error diagnostics instead.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from rcssmin import cssmin
from rjsmin import jsmin

from .diagnostics import MinificationDiagnostic, Severity
from .options import AssetKind, EngineOptions, ScriptOptions, StylesheetOptions


@dataclass
class MinificationResult:
    """Result of minifying one asset.

    Attributes:
        minified_text: Minified text, None if minification failed.
        diagnostics: Messages produced while minifying.
        min_file: Path of the minified artifact, set once it was persisted.
        changed: Whether the artifact content changed, set once it was persisted.
    """

    minified_text: str | None
    diagnostics: list[MinificationDiagnostic] = field(default_factory=list)
    min_file: Path | None = None
    changed: bool | None = None

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


_CLOSERS = {")": "(", "]": "[", "}": "{"}
_OPENERS = "([{"

# A slash after one of these starts a regular expression literal
_REGEX_PRECEDERS = set("(,=:[!&|?{};>+-*%<~^")
_REGEX_KEYWORDS = {
    "return",
    "typeof",
    "case",
    "do",
    "else",
    "in",
    "of",
    "new",
    "delete",
    "void",
    "throw",
    "instanceof",
    "yield",
    "await",
}
_TRAILING_WORD_RE = re.compile(r"([A-Za-z_$][\w$]*)\s*$")
# Operand before a postfix ++ or --
_POSTFIX_OPERAND_RE = re.compile(r"[\w$)\]]\s*(\+\+|--)\s*$")


class SyntaxScanner:
    """Lexical scan that finds structural defects in script or stylesheet text.

    It does not parse the language; it only tracks strings, comments,
    regular expression literals (scripts) and bracket nesting, which is
    enough to catch truncated or unbalanced sources before minifying them.
    """

    def __init__(self, text: str, file_name: str, script: bool):
        self.text = text
        self.file_name = file_name
        self.script = script
        self.quotes = "'\"`" if script else "'\""

    def scan(self) -> list[MinificationDiagnostic]:
        text = self.text
        n = len(text)
        stack: list[tuple[str, int]] = []
        last = ""
        i = 0
        while i < n:
            ch = text[i]
            nxt = text[i + 1] if i + 1 < n else ""

            if ch == "\\":
                i += 2
                continue

            if ch == "/" and nxt == "*":
                end = text.find("*/", i + 2)
                if end == -1:
                    return [self._error(i, "Unterminated comment")]
                i = end + 2
                continue

            if self.script and ch == "/" and nxt == "/":
                end = text.find("\n", i)
                i = n if end == -1 else end
                continue

            if ch in self.quotes:
                end = self._string_end(i)
                if end == -1:
                    return [self._error(i, "Unterminated string literal")]
                i = end + 1
                last = ch
                continue

            if self.script and ch == "/" and self._starts_regex(i, last):
                end = self._regex_end(i)
                if end == -1:
                    return [self._error(i, "Unterminated regular expression literal")]
                i = end + 1
                last = "/"
                continue

            if ch in _OPENERS:
                stack.append((ch, i))
            elif ch in _CLOSERS:
                if not stack or stack[-1][0] != _CLOSERS[ch]:
                    return [self._error(i, f"Unexpected '{ch}'")]
                stack.pop()

            if not ch.isspace():
                last = ch
            i += 1

        return [self._error(offset, f"Unclosed '{opener}'") for opener, offset in stack]

    def _string_end(self, start: int) -> int:
        text = self.text
        quote = text[start]
        i = start + 1
        while i < len(text):
            ch = text[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                return i
            if ch == "\n" and quote != "`":
                return -1
            i += 1
        return -1

    def _starts_regex(self, i: int, last: str) -> bool:
        window = self.text[max(0, i - 32) : i]
        if last in "+-" and _POSTFIX_OPERAND_RE.search(window):
            return False
        if last == "" or last in _REGEX_PRECEDERS:
            return True
        match = _TRAILING_WORD_RE.search(window)
        return bool(match) and match.group(1) in _REGEX_KEYWORDS

    def _regex_end(self, start: int) -> int:
        text = self.text
        in_class = False
        i = start + 1
        while i < len(text):
            ch = text[i]
            if ch == "\\":
                i += 2
                continue
            if ch == "\n":
                return -1
            if in_class:
                if ch == "]":
                    in_class = False
            elif ch == "[":
                in_class = True
            elif ch == "/":
                return i
            i += 1
        return -1

    def _error(self, offset: int, message: str) -> MinificationDiagnostic:
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return MinificationDiagnostic(self.file_name, line, column, message)


def _terminate_declarations(css: str) -> str:
    """Insert a semicolon before each ``}`` that closes a declaration list."""
    out: list[str] = []
    quote = ""
    escaped = False
    prev = ""
    for ch in css:
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == "}" and prev not in ("", ";", "{", "}"):
            out.append(";")
        out.append(ch)
        prev = ch
    return "".join(out)


class BaseMinifier(ABC):
    """Base class for minifiers.

    Each subclass wraps one external minification library for one asset
    kind. The shared ``minify`` runs the syntax scan and only hands
    structurally sound text to ``minify_text``.
    """

    script_syntax = False

    @property
    @abstractmethod
    def kind(self) -> AssetKind:
        """Return the asset kind this minifier handles."""
        ...

    @abstractmethod
    def minify_text(self, source_text: str, options: EngineOptions) -> str:
        """Minify text that passed the syntax scan.

        Args:
            source_text: Text to minify.
            options: Typed options for this minifier's kind.

        Returns:
            Minified text.
        """
        ...

    def can_minify(self, kind: AssetKind) -> bool:
        return kind is self.kind

    def minify(
        self, source_text: str, options: EngineOptions, file_name: str = ""
    ) -> MinificationResult:
        """Scan and minify source text.

        Args:
            source_text: Text to minify.
            options: Typed options for this minifier's kind.
            file_name: Name used in diagnostics.

        Returns:
            MinificationResult; minified_text is None when the scan found errors.
        """
        diagnostics = SyntaxScanner(source_text, file_name, self.script_syntax).scan()
        if any(d.severity is Severity.ERROR for d in diagnostics):
            return MinificationResult(None, diagnostics)
        return MinificationResult(self.minify_text(source_text, options), diagnostics)


class ScriptMinifier(BaseMinifier):
    """Minifies JavaScript using rjsmin."""

    script_syntax = True

    @property
    def kind(self) -> AssetKind:
        return AssetKind.SCRIPT

    def minify_text(self, source_text: str, options: ScriptOptions) -> str:
        minified = jsmin(source_text, keep_bang_comments=options.keep_important_comments)
        if options.term_semicolons and minified and not minified.endswith(";"):
            minified += ";"
        return minified


class StylesheetMinifier(BaseMinifier):
    """Minifies CSS using rcssmin."""

    @property
    def kind(self) -> AssetKind:
        return AssetKind.STYLESHEET

    def minify_text(self, source_text: str, options: StylesheetOptions) -> str:
        minified = cssmin(source_text, keep_bang_comments=options.keep_important_comments)
        if options.term_semicolons:
            minified = _terminate_declarations(minified)
        return minified


class MinifierRegistry:
    """Registry of minifiers, implementing the MinificationEngine protocol.

    New asset kinds can be supported by registering another minifier;
    registering a minifier for an already handled kind replaces it.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._minifiers: dict[AssetKind, BaseMinifier] = {}

    def register(self, minifier: BaseMinifier) -> None:
        self._minifiers[minifier.kind] = minifier

    def get_minifier(self, kind: AssetKind) -> BaseMinifier | None:
        return self._minifiers.get(kind)

    def minify(
        self,
        kind: AssetKind,
        source_text: str,
        options: EngineOptions,
        file_name: str = "",
    ) -> MinificationResult:
        """Minify text with the minifier registered for its kind.

        Returns:
            The minifier's result, or a failed result with an error
            diagnostic if no minifier handles the kind.
        """
        minifier = self.get_minifier(kind)
        if minifier is None:
            return MinificationResult(
                None,
                [
                    MinificationDiagnostic(
                        file_name, 0, 0, f"No minifier registered for {kind.value}"
                    )
                ],
            )
        return minifier.minify(source_text, options, file_name)


def create_default_engine() -> MinifierRegistry:
    """Create a registry with the script and stylesheet minifiers."""
    registry = MinifierRegistry()
    registry.register(ScriptMinifier())
    registry.register(StylesheetMinifier())
    return registry
