"""Value objects produced by a capture run."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ResolvedAsset:
    """An asset whose bytes were fetched and which has a path inside the archive."""

    original_reference: str
    absolute_url: str
    payload: bytes = field(repr=False)
    byte_size: int
    local_path: str
    kind: str


@dataclass(frozen=True)
class AssetCounts:
    """Number of references discovered per kind, whether or not they downloaded."""

    images: int = 0
    stylesheets: int = 0

    @property
    def total(self) -> int:
        return self.images + self.stylesheets


@dataclass(frozen=True)
class ResolutionResult:
    asset_map: Mapping[str, str]
    assets: Tuple[ResolvedAsset, ...]
    counts: AssetCounts
    total_bytes: int

    def __post_init__(self):
        object.__setattr__(self, "asset_map", MappingProxyType(dict(self.asset_map)))


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of one successful capture, ready to be packaged."""

    page_url: str
    final_markup: str
    assets: Tuple[ResolvedAsset, ...]
    counts: AssetCounts
    total_bytes: int
    asset_map: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Callers get a read-only view of the mapping
        object.__setattr__(self, "asset_map", MappingProxyType(dict(self.asset_map)))

    @property
    def total_kilobytes(self) -> int:
        return round(self.total_bytes / 1024)


@dataclass(frozen=True)
class CaptureEvent:
    """One discrete stage notification emitted while a capture runs."""

    stage: str
    current: Optional[int] = None
    total: Optional[int] = None
    result: Optional[CaptureResult] = None
    error: Optional[BaseException] = None
    message: str = ""
