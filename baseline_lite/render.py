"""Rich renderers for scan reports and feature details."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .config import Settings
from .constants import FINDING_SUFFIX, SEVERITY_STYLE_MAP, SUMMARY_OK
from .model import BaselineStatus, Finding, IndexEntry


def finding_message(finding: Finding) -> str:
    return f"{finding.label}: {finding.status.label} - {FINDING_SUFFIX}"


def render_findings(path: str, findings: Iterable[Finding], settings: Settings) -> list[Text]:
    """One line per reported finding: ``path:line:col  severity  message  [key]``."""
    lines: list[Text] = []
    for finding in findings:
        severity = settings.severity_for(finding.status)
        if severity is None:
            continue
        start = finding.range.start
        lines.append(
            Text.assemble(
                (f"{path}:{start.line + 1}:{start.character + 1}", "bold"),
                "  ",
                (severity, SEVERITY_STYLE_MAP.get(severity, "")),
                "  ",
                finding_message(finding),
                "  ",
                (f"[{finding.key}]", "dim"),
            )
        )
    return lines


def summary_line(findings: Iterable[Finding]) -> str:
    """Status-bar style summary, e.g. ``Baseline Lite: 2 limited, 1 newly``."""
    counts = {BaselineStatus.LIMITED: 0, BaselineStatus.NEWLY_AVAILABLE: 0}
    for finding in findings:
        if finding.status in counts:
            counts[finding.status] += 1

    parts: list[str] = []
    for status, count in counts.items():
        if count:
            parts.append(f"{count} {status.short_label}")
    return f"Baseline Lite: {', '.join(parts)}" if parts else SUMMARY_OK


def _baseline_line(entry: IndexEntry) -> str:
    line = f"Baseline: {entry.baseline.label}"
    if entry.baseline is BaselineStatus.NEWLY_AVAILABLE and entry.low_date:
        line = f"{line} (added to Baseline on {entry.low_date})"
    if entry.baseline is BaselineStatus.WIDELY_AVAILABLE and entry.high_date:
        line = f"{line} (widely supported since {entry.high_date})"
    return line


def render_entry(key: str, entry: IndexEntry) -> Group:
    """Render feature details as a Rich renderable group."""
    style = {
        BaselineStatus.WIDELY_AVAILABLE: "green",
        BaselineStatus.NEWLY_AVAILABLE: "yellow",
        BaselineStatus.LIMITED: "red",
    }[entry.baseline]

    lines: list[Text] = [
        Text(entry.feature_name or key, style="bold"),
        Text(_baseline_line(entry), style=style),
    ]
    if entry.description:
        lines.append(Text(""))
        lines.append(Text(entry.description))
    if entry.mdn_url:
        lines.append(Text(""))
        lines.append(Text(f"MDN Reference: {entry.mdn_url}"))

    return Group(Panel(Group(*lines), border_style="blue", title=Text(key)))
