"""Settings loaded from ``[tool.baseline-lite]`` and command-line options."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib
from typing import Any

from .constants import (
    CONFIG_TABLE,
    DEFAULT_CONFIG_FILE,
    DEFAULT_SEVERITY_FOR_LIMITED,
    NEWLY_AVAILABLE_SEVERITY,
    SEVERITIES,
)
from .exceptions import ConfigError
from .model import BaselineStatus


@dataclass(frozen=True)
class Settings:
    core_properties: tuple[str, ...] = ()
    severity_for_limited: str = DEFAULT_SEVERITY_FOR_LIMITED

    def severity_for(self, status: BaselineStatus) -> str | None:
        """Report severity for a status; None means the finding is not reported."""
        if status is BaselineStatus.NEWLY_AVAILABLE:
            return NEWLY_AVAILABLE_SEVERITY
        if status is BaselineStatus.LIMITED and self.severity_for_limited != "none":
            return self.severity_for_limited
        return None


def _read_table(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc.strerror}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    tool = data.get("tool")
    table = tool.get(CONFIG_TABLE) if isinstance(tool, dict) else None
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.{CONFIG_TABLE}] in {path} must be a table")
    return table


def _core_properties(value: object, path: Path) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'core-properties' in {path} must be a list of strings")
    return tuple(item.strip() for item in value if item.strip())


def _severity(value: object) -> str:
    if not isinstance(value, str) or value.strip().lower() not in SEVERITIES:
        raise ConfigError(
            f"'severity-for-limited' must be one of {', '.join(SEVERITIES)} (got {value!r})"
        )
    return value.strip().lower()


def load_settings(
    config_path: Path | None = None,
    *,
    core_properties: Sequence[str] | None = None,
    severity_for_limited: str | None = None,
) -> Settings:
    """Merge file settings with command-line overrides.

    Without an explicit ``config_path`` the working directory's
    ``pyproject.toml`` is read when it exists.
    """
    path = config_path
    if path is None:
        default = Path.cwd() / DEFAULT_CONFIG_FILE
        path = default if default.is_file() else None

    settings = Settings()
    if path is not None:
        table = _read_table(path)
        if "core-properties" in table:
            settings = replace(
                settings, core_properties=_core_properties(table["core-properties"], path)
            )
        if "severity-for-limited" in table:
            settings = replace(
                settings, severity_for_limited=_severity(table["severity-for-limited"])
            )

    if core_properties:
        settings = replace(
            settings,
            core_properties=tuple(name.strip() for name in core_properties if name.strip()),
        )
    if severity_for_limited is not None:
        settings = replace(settings, severity_for_limited=_severity(severity_for_limited))
    return settings
