"""Data models for the compatibility index and scan findings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import enum
import functools
from types import MappingProxyType


@functools.total_ordering
class BaselineStatus(enum.Enum):
    """Baseline maturity tier, ordered Limited < Newly < Widely."""

    LIMITED = 0
    NEWLY_AVAILABLE = 1
    WIDELY_AVAILABLE = 2

    @classmethod
    def from_raw(cls, value: object) -> BaselineStatus | None:
        """Map the upstream ``"high" | "low" | False`` encoding; None if unrecognised."""
        if value is False:
            return cls.LIMITED
        if isinstance(value, str):
            return _RAW_STATUS.get(value.strip().lower())
        return None

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def short_label(self) -> str:
        return _STATUS_SHORT_LABELS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BaselineStatus):
            return NotImplemented
        return self.value < other.value


_RAW_STATUS: dict[str, BaselineStatus] = {
    "high": BaselineStatus.WIDELY_AVAILABLE,
    "low": BaselineStatus.NEWLY_AVAILABLE,
}

_STATUS_LABELS: dict[BaselineStatus, str] = {
    BaselineStatus.WIDELY_AVAILABLE: "Widely available",
    BaselineStatus.NEWLY_AVAILABLE: "Newly available",
    BaselineStatus.LIMITED: "Limited availability",
}

_STATUS_SHORT_LABELS: dict[BaselineStatus, str] = {
    BaselineStatus.WIDELY_AVAILABLE: "widely",
    BaselineStatus.NEWLY_AVAILABLE: "newly",
    BaselineStatus.LIMITED: "limited",
}


@dataclass(frozen=True)
class FeatureRecord:
    feature_id: str
    feature_name: str
    status: BaselineStatus
    mdn_url: str | None
    description: str | None
    compat_keys: tuple[str, ...]
    low_date: str | None = None
    high_date: str | None = None


@dataclass(frozen=True)
class IndexEntry:
    feature_id: str
    feature_name: str
    baseline: BaselineStatus
    mdn_url: str | None = None
    description: str | None = None
    low_date: str | None = None
    high_date: str | None = None

    @classmethod
    def from_record(cls, record: FeatureRecord) -> IndexEntry:
        return cls(
            feature_id=record.feature_id,
            feature_name=record.feature_name,
            baseline=record.status,
            mdn_url=record.mdn_url,
            description=record.description,
            low_date=record.low_date,
            high_date=record.high_date,
        )

    @property
    def is_widely_available(self) -> bool:
        return self.baseline is BaselineStatus.WIDELY_AVAILABLE


def _frozen_mapping(values: Mapping[str, IndexEntry] | None = None) -> Mapping[str, IndexEntry]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class CompatIndex:
    """Read-only snapshot of both lookup key-spaces."""

    markup: Mapping[str, IndexEntry] = field(default_factory=_frozen_mapping)
    script: Mapping[str, IndexEntry] = field(default_factory=_frozen_mapping)

    @classmethod
    def from_tables(
        cls,
        markup: Mapping[str, IndexEntry],
        script: Mapping[str, IndexEntry],
    ) -> CompatIndex:
        return cls(markup=_frozen_mapping(markup), script=_frozen_mapping(script))

    def __len__(self) -> int:
        return len(self.markup) + len(self.script)


@dataclass(frozen=True, order=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class SourceRange:
    start: Position
    end: Position

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> SourceRange:
        return cls(Position(line, start), Position(line, end))


@dataclass(frozen=True)
class Finding:
    range: SourceRange
    status: BaselineStatus
    label: str
    key: str
