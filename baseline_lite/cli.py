"""Console script for baseline-lite."""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.text import Text

from . import __version__ as _version
from .config import Settings, load_settings
from .constants import BROWSER_COMPAT_DATA_URL, LANGUAGE_KINDS, SEVERITIES, WEB_FEATURES_URL
from .dataset import compat_from_payload, features_from_payload, load_json_source
from .exceptions import BaselineLiteError
from .http import use_shared_client
from .index import rebuild_index
from .model import CompatIndex, Finding
from .render import render_entry, render_findings, summary_line
from .resolve import resolve_token_with_key, token_at
from .scanners import detect_language, scan
from .util.text import debug_enabled

F = TypeVar("F", bound=Callable[..., Any])


def _dataset_options(func: F) -> F:
    options = [
        click.option(
            "--features",
            "features_source",
            envvar="BASELINE_LITE_FEATURES",
            default=WEB_FEATURES_URL,
            show_default=True,
            help="web-features data.json (path or URL).",
        ),
        click.option(
            "--compat",
            "compat_source",
            envvar="BASELINE_LITE_COMPAT",
            default=None,
            help=(
                "Optional browser-compat-data data.json (path or URL) for MDN links, "
                f"e.g. {BROWSER_COMPAT_DATA_URL}"
            ),
        ),
        click.option(
            "--core-property",
            "core_properties",
            multiple=True,
            metavar="NAME",
            help="CSS property to treat as widely available. Repeatable.",
        ),
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="TOML file with a [tool.baseline-lite] table (default: ./pyproject.toml).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_index(
    features_source: str,
    compat_source: str | None,
    settings: Settings,
) -> CompatIndex:
    features = features_from_payload(load_json_source(features_source), features_source)
    compat = None
    if compat_source:
        compat = compat_from_payload(load_json_source(compat_source), compat_source)
    return rebuild_index(features, compat, settings.core_properties)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(_version, "-v", "--version")
def main() -> None:
    """
    Flag web-platform features that are not Baseline widely available

    \b
    Example usages:
      baseline-lite scan styles.css index.html app.ts
      baseline-lite lookup :has
      baseline-lite lookup balance --line "text-wrap: balance;"
      baseline-lite lookup --line "dialog::backdrop {" --column 9
    """
    if debug_enabled():
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command(name="scan")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@_dataset_options
@click.option(
    "--severity-for-limited",
    type=click.Choice(SEVERITIES),
    default=None,
    help="Severity for limited-availability findings ('none' hides them).",
)
@click.option(
    "--language",
    type=click.Choice(LANGUAGE_KINDS),
    default=None,
    help="Language of every file, instead of detecting it from the extension.",
)
@click.option("--strict", is_flag=True, help="Exit with status 1 when anything is reported.")
def scan_command(
    paths: tuple[Path, ...],
    features_source: str,
    compat_source: str | None,
    core_properties: tuple[str, ...],
    config_path: Path | None,
    severity_for_limited: str | None,
    language: str | None,
    strict: bool,
) -> None:
    """Scan CSS, HTML and JS/TS files."""
    console = Console()
    try:
        settings = load_settings(
            config_path,
            core_properties=core_properties,
            severity_for_limited=severity_for_limited,
        )
        with use_shared_client():
            index = _load_index(features_source, compat_source, settings)
    except BaselineLiteError as exc:
        raise click.ClickException(str(exc)) from exc

    reported: list[Finding] = []
    for path in paths:
        kind = language or detect_language(path)
        if kind is None:
            console.print(
                Text(f"Skipping {path}: unknown language.", style="dim"), soft_wrap=True
            )
            continue
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise click.ClickException(f"Unable to read {path}: {exc}") from exc

        findings = [
            finding
            for finding in scan(source, kind, index)
            if settings.severity_for(finding.status) is not None
        ]
        for line in render_findings(str(path), findings, settings):
            console.print(line, soft_wrap=True)
        reported.extend(findings)

    console.print(Text(summary_line(reported), style="bold"), soft_wrap=True)
    if strict and reported:
        raise click.exceptions.Exit(1)


@main.command(name="lookup")
@click.argument("token", required=False)
@click.option(
    "--line",
    "line_text",
    default="",
    help="Source line containing the token, for property value lookups.",
)
@click.option(
    "--column",
    type=click.IntRange(min=0),
    default=None,
    help="0-based column in --line; the word there is looked up when TOKEN is omitted.",
)
@_dataset_options
def lookup_command(
    token: str | None,
    line_text: str,
    column: int | None,
    features_source: str,
    compat_source: str | None,
    core_properties: tuple[str, ...],
    config_path: Path | None,
) -> None:
    """Show Baseline details for a property, selector, element or API."""
    if token is None:
        if not line_text or column is None:
            raise click.UsageError("Provide TOKEN, or --line together with --column.")
        token = token_at(line_text, column)
        if token is None:
            raise click.ClickException(f"No token at column {column}")

    console = Console()
    try:
        settings = load_settings(config_path, core_properties=core_properties)
        with use_shared_client():
            index = _load_index(features_source, compat_source, settings)
    except BaselineLiteError as exc:
        raise click.ClickException(str(exc)) from exc

    resolved = resolve_token_with_key(index, token, line_text)
    if resolved is None:
        raise click.ClickException(f"No baseline data for {token}")
    console.print(render_entry(*resolved))
