"""AST-based JavaScript/TypeScript scanner built on tree-sitter."""

from __future__ import annotations

from functools import lru_cache
import logging

from tree_sitter import Language, Node, Parser
import tree_sitter_javascript
import tree_sitter_typescript

from ..constants import SCRIPT_GLOBAL_ROOTS
from ..model import CompatIndex, Finding, IndexEntry, SourceRange
from ..util.text import LineIndex, utf8_to_char_offset
from ._base import make_finding

LOGGER = logging.getLogger(__name__)

_CHAIN_TYPES = frozenset({"member_expression", "subscript_expression"})
_PROPERTY_TYPES = frozenset({"property_identifier", "identifier"})


@lru_cache(maxsize=None)
def _language(language: str) -> Language:
    if language == "typescript":
        return Language(tree_sitter_typescript.language_typescript())
    if language == "typescriptreact":
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_javascript.language())


def parse_script(source: bytes, language: str = "javascript") -> Node | None:
    """Parse source into a syntax tree; None when the source has syntax errors."""
    try:
        tree = Parser(_language(language)).parse(source)
    except Exception:
        LOGGER.debug("tree-sitter failed to parse %s source", language, exc_info=True)
        return None
    root = tree.root_node
    if root.has_error:
        return None
    return root


class _ScriptScanner:
    def __init__(self, text: str, source: bytes, index: CompatIndex) -> None:
        self._source = source
        self._script = index.script
        self._lines = LineIndex(text)
        self._ascii = len(source) == len(text)

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _span(self, node: Node) -> SourceRange:
        start, end = node.start_byte, node.end_byte
        if not self._ascii:
            start = utf8_to_char_offset(self._source, start)
            end = utf8_to_char_offset(self._source, end)
        return SourceRange(self._lines.position(start), self._lines.position(end))

    def _property_name(self, node: Node) -> str | None:
        if node.type == "member_expression":
            prop = node.child_by_field_name("property")
            if prop is None or prop.type not in _PROPERTY_TYPES:
                return None
            return self._text(prop)

        index = node.child_by_field_name("index")
        if index is None or index.type != "string":
            return None
        name = "".join(
            self._text(child) for child in index.children if child.type == "string_fragment"
        )
        return name or None

    def chain_path(self, node: Node) -> list[str] | None:
        """Dotted segments of a member chain, root first; None if not a plain chain."""
        segments: list[str] = []
        current: Node | None = node
        while current is not None and current.type in _CHAIN_TYPES:
            name = self._property_name(current)
            if name is None:
                return None
            segments.append(name)
            current = current.child_by_field_name("object")
        if current is None or current.type != "identifier":
            return None
        segments.append(self._text(current))
        segments.reverse()
        return segments

    def _lookup_chain(self, node: Node) -> tuple[str, str, IndexEntry] | None:
        segments = self.chain_path(node)
        if segments is None or len(segments) < 2 or segments[0] not in SCRIPT_GLOBAL_ROOTS:
            return None
        root, rest = segments[0], segments[1:]
        runtime_key = ".".join(segments)
        interface_key = ".".join([root[:1].upper() + root[1:], *rest])
        for key in (runtime_key, interface_key):
            entry = self._script.get(key)
            if entry is not None:
                return key, runtime_key, entry
        return None

    def member_finding(self, node: Node) -> Finding | None:
        """Match the longest indexed prefix of a chain; at most one finding per chain."""
        current: Node | None = node
        while current is not None and current.type in _CHAIN_TYPES:
            resolved = self._lookup_chain(current)
            if resolved is not None:
                key, label, entry = resolved
                return make_finding(entry, key, self._span(current), label)
            current = current.child_by_field_name("object")
        return None

    def constructor_finding(self, node: Node) -> Finding | None:
        constructor = node.child_by_field_name("constructor")
        if constructor is None or constructor.type != "identifier":
            return None
        name = self._text(constructor)
        if not name[:1].isupper():
            return None
        return make_finding(self._script.get(name), name, self._span(node), f"new {name}()")

    def scan(self, root: Node) -> list[Finding]:
        findings: list[Finding] = []
        # (node, is the object of an enclosing chain link)
        stack: list[tuple[Node, bool]] = [(root, False)]
        while stack:
            node, inner_link = stack.pop()
            finding: Finding | None = None
            chain_object: Node | None = None
            if node.type in _CHAIN_TYPES:
                chain_object = node.child_by_field_name("object")
                if not inner_link:
                    finding = self.member_finding(node)
            elif node.type == "new_expression":
                finding = self.constructor_finding(node)
            if finding:
                findings.append(finding)

            for child in reversed(node.children):
                is_object = chain_object is not None and (
                    child.start_byte == chain_object.start_byte
                    and child.end_byte == chain_object.end_byte
                    and child.type == chain_object.type
                )
                stack.append((child, is_object))
        return findings


def scan_script(text: str, index: CompatIndex, language: str = "javascript") -> list[Finding]:
    """Scan script source; syntax errors yield no findings."""
    source = text.encode("utf-8")
    root = parse_script(source, language)
    if root is None:
        return []
    return _ScriptScanner(text, source, index).scan(root)
