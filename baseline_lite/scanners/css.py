"""Line-based CSS scanner.

Each line is cut into segments at ``{``, ``}`` and ``;`` so a one-line rule
such as ``a { color: red; gap: 1px; }`` is handled like its multi-line form.
A segment is classified as an at-rule prelude, a selector (depth 0 or ended
by ``{``) or a declaration (inside a block).
"""

from __future__ import annotations

from collections.abc import Iterator
import re

from ..model import CompatIndex, Finding, SourceRange
from ..util.text import split_lines
from ._base import make_finding

_AT_RULE_RE = re.compile(r"^@([-a-z0-9]+)", re.IGNORECASE)
_PSEUDO_RE = re.compile(r"(::?)([A-Za-z0-9_-]+)")
DECLARATION_RE = re.compile(r"^\s*([-\w]+)\s*:\s*([^;]*[^;\s])\s*;?\s*$")
_VALUE_SPLIT_RE = re.compile(r"[\s,()]+")


def split_value(value: str) -> list[str]:
    """Tokenize a declaration value on whitespace, commas and parentheses."""
    return [token for token in _VALUE_SPLIT_RE.split(value.strip()) if token]


def _mask_comments(line: str, in_comment: bool) -> tuple[str, bool]:
    """Blank out ``/* ... */`` text, carrying an open comment across lines."""
    chars = list(line)
    start = 0
    pos = 0
    while True:
        if in_comment:
            close = line.find("*/", pos)
            stop = len(line) if close == -1 else close + 2
            chars[start:stop] = " " * (stop - start)
            if close == -1:
                return "".join(chars), True
            pos = stop
            in_comment = False
        else:
            opened = line.find("/*", pos)
            if opened == -1:
                return "".join(chars), False
            start = opened
            pos = opened + 2
            in_comment = True


def _segments(line: str) -> Iterator[tuple[int, int, str]]:
    start = 0
    for idx, char in enumerate(line):
        if char in "{};":
            yield start, idx, char
            start = idx + 1
    yield start, len(line), ""


class _CssLineScanner:
    def __init__(self, index: CompatIndex) -> None:
        self._markup = index.markup
        self._in_comment = False
        self._depth = 0

    def scan_line(self, line_no: int, raw_line: str) -> list[Finding]:
        line, self._in_comment = _mask_comments(raw_line, self._in_comment)
        if not line.strip():
            return []

        findings: list[Finding] = []
        for start, end, terminator in _segments(line):
            segment = line[start:end]
            if segment.strip():
                findings.extend(self._scan_segment(line_no, line, start, end, terminator))
            if terminator == "{":
                self._depth += 1
            elif terminator == "}":
                self._depth = max(self._depth - 1, 0)
        return findings

    def _scan_segment(
        self, line_no: int, line: str, start: int, end: int, terminator: str
    ) -> list[Finding]:
        segment = line[start:end]
        stripped = segment.lstrip()
        if stripped.startswith("@"):
            return self._at_rule(line_no, start + len(segment) - len(stripped), stripped)
        if terminator == "{" or self._depth == 0:
            if ":" not in segment:
                return []
            return self._pseudos(line_no, start, segment)
        return self._declaration(line_no, line, start, end)

    def _at_rule(self, line_no: int, column: int, stripped: str) -> list[Finding]:
        match = _AT_RULE_RE.match(stripped)
        if match is None:
            return []
        key = f"@{match.group(1).lower()}"
        finding = make_finding(
            self._markup.get(key),
            key,
            SourceRange.on_line(line_no, column, column + match.end(1)),
            key,
        )
        return [finding] if finding else []

    def _pseudos(self, line_no: int, start: int, segment: str) -> list[Finding]:
        findings: list[Finding] = []
        for match in _PSEUDO_RE.finditer(segment):
            key = f"{match.group(1)}{match.group(2).lower()}"
            finding = make_finding(
                self._markup.get(key),
                key,
                SourceRange.on_line(line_no, start + match.start(), start + match.end()),
                match.group(0),
            )
            if finding:
                findings.append(finding)
        return findings

    def _declaration(self, line_no: int, line: str, start: int, end: int) -> list[Finding]:
        match = DECLARATION_RE.match(line[start:end])
        if match is None:
            return []
        prop_name = match.group(1)
        prop = prop_name.lower()
        if prop.startswith("--"):
            return []

        findings: list[Finding] = []
        prop_start = start + match.start(1)
        finding = make_finding(
            self._markup.get(prop),
            prop,
            SourceRange.on_line(line_no, prop_start, prop_start + len(prop_name)),
            prop_name,
        )
        if finding:
            findings.append(finding)

        colon_at = line.find(":", start + match.end(1), end)
        for token in split_value(match.group(2)):
            key = f"{prop}::{token.lower()}"
            entry = self._markup.get(key)
            if entry is None:
                continue
            # First occurrence after the colon; repeated tokens share a span.
            token_at = line.find(token, colon_at, end)
            if token_at == -1:
                continue
            finding = make_finding(
                entry,
                key,
                SourceRange.on_line(line_no, token_at, token_at + len(token)),
                f"{prop_name}: {token}",
            )
            if finding:
                findings.append(finding)
        return findings


def scan_css(text: str, index: CompatIndex) -> list[Finding]:
    """Scan CSS source text and return findings in document order."""
    scanner = _CssLineScanner(index)
    findings: list[Finding] = []
    for line_no, line in enumerate(split_lines(text)):
        findings.extend(scanner.scan_line(line_no, line))
    return findings
