"""
Run-level aggregation of per-file sync results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from automaton.core.models import FileResult, SyncOutcome


@dataclass
class RunSummary:
    """Accumulates file results across every task of a run."""

    started_at: datetime = field(default_factory=datetime.now)
    ended_at: datetime | None = None
    results: list[FileResult] = field(default_factory=list)
    counts: dict[SyncOutcome, int] = field(
        default_factory=lambda: {outcome: 0 for outcome in SyncOutcome}
    )
    skipped_paths: list[Path] = field(default_factory=list)

    def record(self, result: FileResult) -> None:
        self.results.append(result)
        self.counts[result.outcome] += 1
        if result.outcome is SyncOutcome.SKIPPED:
            self.skipped_paths.append(result.destination)

    def finish(self) -> None:
        self.ended_at = datetime.now()

    def count(self, outcome: SyncOutcome) -> int:
        return self.counts[outcome]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> bool:
        """A run fails only when conflict-aware copy skipped something."""
        return bool(self.skipped_paths)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def warning_lines(self) -> list[str]:
        """End-of-run warning block, empty when the run succeeded."""
        if not self.failed:
            return []
        return [
            f"{len(self.skipped_paths)} file(s) were skipped due to local modifications.",
            "Run with --force to overwrite them.",
        ]

    def to_dict(self) -> dict[str, object]:
        return {
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "summary": {
                outcome.name.lower(): count for outcome, count in self.counts.items()
            },
            "skipped_paths": [str(path) for path in self.skipped_paths],
            "files": [result.to_dict() for result in self.results],
            "exit_code": self.exit_code,
        }
