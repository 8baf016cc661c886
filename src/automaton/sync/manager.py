"""
Automaton sync manager.

Applies one of three link disciplines to every file of a sync task:

LINK   : destination is a symlink to the source, replaced unconditionally.
MIRROR : destination directory is made identical to the source directory,
         stale files are updated and extra files removed.
COPY   : conflict-aware copy; files with local modifications are skipped
         unless ``force`` is set.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from automaton.core.config import SyncOptions
from automaton.core.errors import SourceOverlapError
from automaton.core.logging import get_logger
from automaton.core.models import (
    DiscoveredFile,
    FileResult,
    SyncMode,
    SyncOutcome,
    SyncTask,
)
from automaton.sync.file_ops import (
    copy_file,
    entry_exists,
    files_identical,
    flat_name,
    is_within,
    iter_directories,
    iter_entries,
    iter_flat_files,
    iter_source_files,
    link_file,
    prune_empty_directories,
    same_file,
)
from automaton.sync.summary import RunSummary

logger = get_logger(__name__)

ResultCallback = Callable[[FileResult], None]


class SyncManager:
    """Handles file synchronization for resolved sync tasks."""

    def __init__(
        self,
        mode: SyncMode = SyncMode.LINK,
        force: bool = False,
        on_result: ResultCallback | None = None,
    ) -> None:
        self.mode = mode
        self.force = force
        self.on_result = on_result

    @classmethod
    def from_options(
        cls, options: SyncOptions, on_result: ResultCallback | None = None
    ) -> SyncManager:
        return cls(mode=options.mode, force=options.force, on_result=on_result)

    def run(self, tasks: Iterable[SyncTask], summary: RunSummary | None = None) -> RunSummary:
        """Sync every task in order and fold the results into a summary."""
        summary = summary if summary is not None else RunSummary()
        for task in tasks:
            for result in self.run_task(task):
                summary.record(result)
        return summary

    def run_task(self, task: SyncTask) -> list[FileResult]:
        """Sync a single task and return its per-file results."""
        results: list[FileResult] = []
        logger.debug(
            "Syncing task",
            agent=task.agent_id,
            kind=task.kind.value,
            source=str(task.source_root),
            destination=str(task.dest_root),
            mode=self.mode.value,
        )

        if self.mode is SyncMode.MIRROR:
            self._mirror_task(task, results)
            return results

        for discovered in self.discover(task):
            destination = self.destination_for(task, discovered)
            if self.mode is SyncMode.LINK:
                outcome = self._link(task, discovered.absolute_path, destination)
            else:
                outcome = self._copy(task, discovered.absolute_path, destination)
            self._emit(results, task, discovered.absolute_path, destination, outcome)
        return results

    def discover(self, task: SyncTask) -> Iterator[DiscoveredFile]:
        if task.is_flat:
            return iter_flat_files(task.source_root)
        return iter_source_files(task.source_root)

    def destination_for(self, task: SyncTask, discovered: DiscoveredFile) -> Path:
        if task.flat_suffix is not None:
            return task.dest_root / flat_name(discovered.relative_path.name, task.flat_suffix)
        return task.dest_root / discovered.relative_path

    def _check_destination(self, task: SyncTask, destination: Path) -> None:
        """Refuse writes that would land inside the task's source tree."""
        if is_within(destination, task.source_root):
            raise SourceOverlapError(destination, task.source_root)

    def _link(self, task: SyncTask, source: Path, destination: Path) -> SyncOutcome:
        # Already reaches the source, e.g. through a linked destination directory.
        if same_file(destination, source):
            return SyncOutcome.UPDATED
        self._check_destination(task, destination.parent)
        existed = entry_exists(destination)
        link_file(source, destination)
        return SyncOutcome.UPDATED if existed else SyncOutcome.CREATED

    def _copy(self, task: SyncTask, source: Path, destination: Path) -> SyncOutcome:
        # Identity is checked before force so matching files never count as overwritten.
        if not destination.exists():
            self._check_destination(task, destination.parent)
            copy_file(source, destination)
            return SyncOutcome.CREATED
        if files_identical(source, destination):
            return SyncOutcome.UP_TO_DATE
        if self.force:
            self._check_destination(task, destination.parent)
            copy_file(source, destination)
            return SyncOutcome.OVERWRITTEN
        return SyncOutcome.SKIPPED

    def _mirror_task(self, task: SyncTask, results: list[FileResult]) -> None:
        if not task.source_root.is_dir():
            return
        # A mirror onto its own source would prune and rewrite the source.
        self._check_destination(task, task.dest_root)

        files = list(self.discover(task))
        expected = {
            self.destination_for(task, discovered).relative_to(task.dest_root): discovered
            for discovered in files
        }
        expected_dirs = set() if task.is_flat else set(iter_directories(task.source_root))

        for relative_path in list(iter_entries(task.dest_root)):
            if relative_path in expected:
                continue
            stale = task.dest_root / relative_path
            stale.unlink()
            self._emit(results, task, None, stale, SyncOutcome.REMOVED)
        prune_empty_directories(task.dest_root, expected_dirs)

        task.dest_root.mkdir(parents=True, exist_ok=True)
        for relative_dir in sorted(expected_dirs):
            (task.dest_root / relative_dir).mkdir(parents=True, exist_ok=True)

        for relative_path, discovered in expected.items():
            destination = task.dest_root / relative_path
            outcome = self._mirror_file(discovered.absolute_path, destination)
            self._emit(results, task, discovered.absolute_path, destination, outcome)

    def _mirror_file(self, source: Path, destination: Path) -> SyncOutcome:
        if not entry_exists(destination):
            copy_file(source, destination)
            return SyncOutcome.CREATED
        if not destination.is_symlink() and files_identical(source, destination):
            return SyncOutcome.UP_TO_DATE
        copy_file(source, destination)
        return SyncOutcome.UPDATED

    def _emit(
        self,
        results: list[FileResult],
        task: SyncTask,
        source: Path | None,
        destination: Path,
        outcome: SyncOutcome,
    ) -> None:
        result = FileResult(task=task, source=source, destination=destination, outcome=outcome)
        results.append(result)
        logger.debug(
            "Synced file",
            agent=task.agent_id,
            destination=str(destination),
            outcome=outcome.name,
        )
        if self.on_result is not None:
            self.on_result(result)
