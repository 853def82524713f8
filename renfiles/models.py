"""Core dataclasses shared across renfiles modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CandidateFile:
    """A file name in its source directory, as produced by :mod:`scanner`."""

    directory: Path
    name: str

    @property
    def path(self) -> Path:
        return self.directory / self.name


@dataclass(frozen=True, slots=True)
class Classification:
    """Destination computed by the classification engine for one file name.

    ``subdir`` is relative to the destination root; an empty string means the
    root itself. An empty ``labels`` set means no labeling step.
    """

    dest_name: str
    subdir: str
    labels: frozenset[str] = frozenset()
    rule: str = field(default="", compare=False)
    notes: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not self.dest_name:
            raise ValueError("dest_name must not be empty")


@dataclass(slots=True)
class MoveOutcome:
    """Result of executing one classification."""

    source: Path
    destination: Path | None
    success: bool
    dry_run: bool = False
    labeled: bool = False
    error: str | None = None
    actions: list[str] = field(default_factory=list)


@dataclass(slots=True)
class BatchSummary:
    """Aggregated statistics produced by the batch runner."""

    processed: int = 0
    skipped: int = 0
    failed: int = 0
    ignored: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.processed + self.skipped + self.failed

    def to_dict(self) -> dict[str, object]:
        """Serialize the summary for JSON output."""

        return {
            "processed": self.processed,
            "skipped": self.skipped,
            "failed": self.failed,
            "ignored": self.ignored,
            "total": self.total,
            "errors": list(self.errors),
        }
