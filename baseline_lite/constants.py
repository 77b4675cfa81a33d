"""Constants used across pybaseline-lite."""

from __future__ import annotations

from typing import Final

WEB_FEATURES_URL: Final[str] = "https://unpkg.com/web-features/data.json"
BROWSER_COMPAT_DATA_URL: Final[str] = "https://unpkg.com/@mdn/browser-compat-data/data.json"

MDN_BASE_URL: Final[str] = "https://developer.mozilla.org/en-US/docs"
MDN_CSS_URL_TEMPLATE: Final[str] = f"{MDN_BASE_URL}/Web/CSS/{{name}}"
MDN_HTML_ELEMENT_URL_TEMPLATE: Final[str] = f"{MDN_BASE_URL}/Web/HTML/Element/{{name}}"
MDN_HTML_GLOBAL_ATTRIBUTE_URL_TEMPLATE: Final[str] = (
    f"{MDN_BASE_URL}/Web/HTML/Global_attributes/{{name}}"
)
MDN_API_URL_TEMPLATE: Final[str] = f"{MDN_BASE_URL}/Web/API/{{path}}"
MDN_CSS_PAGE_MARKER: Final[str] = "/docs/Web/CSS/"

LANGUAGE_KINDS: Final[tuple[str, ...]] = (
    "css",
    "html",
    "javascript",
    "javascriptreact",
    "typescript",
    "typescriptreact",
)

LANGUAGE_BY_SUFFIX: Final[dict[str, str]] = {
    ".css": "css",
    ".html": "html",
    ".htm": "html",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "typescriptreact",
}

# Attributes present on nearly every element; looking them up as global
# attributes only produces noise.
NOISY_HTML_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    {
        "action",
        "alt",
        "charset",
        "class",
        "content",
        "for",
        "height",
        "href",
        "id",
        "lang",
        "method",
        "name",
        "rel",
        "role",
        "src",
        "style",
        "tabindex",
        "target",
        "title",
        "type",
        "value",
        "width",
    }
)

SCRIPT_GLOBAL_ROOTS: Final[frozenset[str]] = frozenset(
    {
        "window",
        "document",
        "navigator",
        "location",
        "history",
        "screen",
        "performance",
    }
)

SEVERITIES: Final[tuple[str, ...]] = ("warning", "information", "hint", "none")
DEFAULT_SEVERITY_FOR_LIMITED: Final[str] = "information"
NEWLY_AVAILABLE_SEVERITY: Final[str] = "warning"

SEVERITY_STYLE_MAP: Final[dict[str, str]] = {
    "warning": "yellow",
    "information": "cyan",
    "hint": "dim",
}

CONFIG_TABLE: Final[str] = "baseline-lite"
DEFAULT_CONFIG_FILE: Final[str] = "pyproject.toml"

FINDING_SUFFIX: Final[str] = "not fully supported across all major browsers"
SUMMARY_OK: Final[str] = "Baseline: OK"

DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0
