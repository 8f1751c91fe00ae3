"""Findings and the scan result."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

# Stable file-type vocabulary; reporting layers branch on these keys.
FILE_TYPES = ("scripts", "components", "images", "media", "styles")

UNUSED_IMPORT_CONFIDENCE = 90


def clamp_confidence(value: float) -> int:
    """Clamp a heuristic score into [0, 100]."""
    return int(max(0, min(100, round(value))))


@dataclass(frozen=True)
class UnusedFile:
    path: str
    file_type: str
    size: int
    confidence: int


@dataclass(frozen=True)
class UnusedExport:
    file_path: str
    name: str
    kind: str
    confidence: int


@dataclass(frozen=True)
class UnusedImport:
    file_path: str
    name: str
    source: str
    kind: str
    confidence: int = UNUSED_IMPORT_CONFIDENCE


@dataclass(frozen=True)
class DetectorResult:
    """What one category detector found."""

    category: str
    unused_files: tuple[UnusedFile, ...] = ()
    unused_exports: tuple[UnusedExport, ...] = ()
    unused_imports: tuple[UnusedImport, ...] = ()


@dataclass(frozen=True)
class ScanResult:
    project_root: str
    unused_files: tuple[UnusedFile, ...] = ()
    unused_exports: tuple[UnusedExport, ...] = ()
    unused_imports: tuple[UnusedImport, ...] = ()
    categories: tuple[str, ...] = ()
    scanned_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total(self) -> int:
        return len(self.unused_files) + len(self.unused_exports) + len(self.unused_imports)

    def filtered(self, threshold: int) -> "ScanResult":
        """Copy keeping only findings with confidence >= *threshold*."""
        return ScanResult(
            project_root=self.project_root,
            unused_files=tuple(f for f in self.unused_files if f.confidence >= threshold),
            unused_exports=tuple(e for e in self.unused_exports if e.confidence >= threshold),
            unused_imports=tuple(i for i in self.unused_imports if i.confidence >= threshold),
            categories=self.categories,
            scanned_at=self.scanned_at,
        )

    def files_by_type(self) -> dict[str, list[UnusedFile]]:
        grouped: dict[str, list[UnusedFile]] = {t: [] for t in FILE_TYPES}
        for f in self.unused_files:
            grouped.setdefault(f.file_type, []).append(f)
        return grouped

    def to_dict(self) -> dict:
        return {
            "project_root": self.project_root,
            "scanned_at": self.scanned_at.isoformat(),
            "categories": list(self.categories),
            "total": self.total,
            "unused_files": [asdict(f) for f in self.unused_files],
            "unused_exports": [asdict(e) for e in self.unused_exports],
            "unused_imports": [asdict(i) for i in self.unused_imports],
        }
