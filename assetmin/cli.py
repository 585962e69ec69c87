"""Command-line interface for Assetmin.

This module defines the CLI commands using Click framework.
It wires the pipeline to the console: a console observer subscribes to the
lifecycle notifications and diagnostics are printed through a reporter.

Commands:
- minify: Minify the given script and stylesheet files.
- build: Minify every build unit listed in a config file.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import click

from . import __version__
from .config import DEFAULT_CONFIG_NAME, BuildUnit, ConfigError, load_build_units
from .diagnostics import DiagnosticsReporter, Severity
from .events import EventNotifier, MinifyFileEvent
from .minifier import ArtifactWriteError, FileMinifier, MissingSourceError


class ConsoleObserver:
    """Echoes one line per written or unchanged artifact."""

    def __init__(self, root: Path):
        self.root = root

    def before_write_min_file(self, event: MinifyFileEvent) -> None:
        pass

    def after_write_min_file(self, event: MinifyFileEvent) -> None:
        self._report(event)

    def before_write_gzip_file(self, event: MinifyFileEvent) -> None:
        pass

    def after_write_gzip_file(self, event: MinifyFileEvent) -> None:
        self._report(event)

    def _report(self, event: MinifyFileEvent) -> None:
        path = _display_path(event.derived_file, self.root)
        if event.changed:
            click.echo(f"Wrote {path}")
        else:
            click.echo(click.style(f"Unchanged {path}", dim=True))


@click.group()
@click.version_option(version=__version__, prog_name="assetmin")
def cli():
    """Assetmin script and stylesheet minifier."""


@cli.command()
@click.argument(
    "files", nargs=-1, required=True, type=click.Path(dir_okay=False, path_type=Path)
)
@click.option("--gzip", "gzip_", is_flag=True, help="Also write a .gz copy")
@click.option(
    "-o",
    "--option",
    "options",
    multiple=True,
    metavar="KEY=VALUE",
    help="Minify option, e.g. -o termSemicolons=true",
)
def minify(files: tuple[Path, ...], gzip_: bool, options: tuple[str, ...]):
    """Minify script and stylesheet files."""
    config = _parse_options(options)
    if gzip_:
        config["gzip"] = "true"
    units = [BuildUnit(output_file=path.absolute(), minify=dict(config)) for path in files]
    _run_units(units, Path.cwd())


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_NAME,
    show_default=True,
    help="Config file listing the build units",
)
def build(config_path: Path):
    """Minify every build unit listed in a config file."""
    try:
        units = load_build_units(config_path)
    except ConfigError as exc:
        _fail("Invalid config:", exc.config_path, exc.message)
    _run_units(units, Path.cwd())


def _parse_options(options: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` pairs into a minify configuration."""
    config = {}
    for option in options:
        key, sep, value = option.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(
                f"expected KEY=VALUE, got {option!r}", param_hint="--option"
            )
        config[key.strip()] = value.strip()
    return config


def _run_units(units: Iterable[BuildUnit], root: Path) -> None:
    notifier = EventNotifier()
    notifier.subscribe_all(ConsoleObserver(root))
    minifier = FileMinifier(notifier)
    reporter = DiagnosticsReporter()

    for unit in units:
        if not unit.enabled:
            continue
        try:
            result = minifier.minify_file(unit)
        except MissingSourceError as exc:
            _fail("Minify failed:", exc.source_path, "source file not found")
        except ArtifactWriteError as exc:
            _fail("Minify failed:", exc.target_path, str(exc.original_error))

        path = _display_path(unit.output_file, root)
        if result is None:
            click.echo(f"Skipped {path}: not a script or stylesheet")
            continue
        reporter.add(str(unit.output_file), result.diagnostics)
        for diagnostic in result.diagnostics:
            color = "yellow" if diagnostic.severity is Severity.WARNING else "red"
            click.echo(click.style(reporter.format(diagnostic), fg=color), err=True)

    if reporter.has_errors:
        raise SystemExit(1)


def _fail(title: str, path: Path, message: str) -> None:
    click.echo(click.style(title, fg="red", bold=True), err=True)
    click.echo(click.style(f"  File: {path}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {message}", fg="white"), err=True)
    raise SystemExit(1) from None


def _display_path(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()
