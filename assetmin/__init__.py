"""Assetmin asset minification step.

This package turns compiled script and stylesheet output files into minified
``.min`` artifacts and, optionally, gzip-compressed ``.min.*.gz`` copies.
Artifacts are only rewritten when their content changes, and observers are
notified before and after every artifact write.

The main entry point for programmatic use is ``FileMinifier`` in the minifier
module; the CLI module wraps it with commands for single files and
config-driven builds.

Architecture:
- Options are resolved once into typed records (options module).
- Minification engines are pluggable (protocols and engines modules).
- Lifecycle notifications go through an explicit notifier instance (events module).
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
