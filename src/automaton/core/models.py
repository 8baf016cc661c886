"""
Automaton data models.

Defines the core data structures for agents, sync tasks, and per-file results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path


class TaskKind(Enum):
    """Kind of content a sync task distributes."""

    COMMANDS = "commands"
    SKILLS = "skills"


class SyncMode(Enum):
    """Link discipline used when writing destinations."""

    LINK = "link"  # reference: symlink pointing back at the source
    MIRROR = "mirror"  # replicate: destination made identical to source
    COPY = "copy"  # legacy conflict-aware copy, keeps local edits

    @classmethod
    def from_string(cls, value: str) -> SyncMode:
        """Create SyncMode from a CLI value."""
        value_lower = value.lower().strip()
        for mode in cls:
            if mode.value == value_lower:
                return mode
        raise ValueError(f"Invalid sync mode: {value}")


class SyncOutcome(Enum):
    """Result of syncing a single destination entry."""

    CREATED = auto()
    UP_TO_DATE = auto()
    UPDATED = auto()
    OVERWRITTEN = auto()
    SKIPPED = auto()
    REMOVED = auto()


@dataclass(frozen=True)
class AgentSpec:
    """Destination convention of a single coding agent."""

    agent_id: str
    display_name: str
    commands_path: str
    skills_path: str | None = None
    is_global: bool = False
    flat_suffix: str | None = None

    @property
    def supports_skills(self) -> bool:
        return self.skills_path is not None


@dataclass(frozen=True)
class SyncTask:
    """A single (source root, destination root) pair to synchronize."""

    agent_id: str
    source_root: Path
    dest_root: Path
    kind: TaskKind
    flat_suffix: str | None = None

    @property
    def is_flat(self) -> bool:
        return self.flat_suffix is not None


@dataclass(frozen=True)
class DiscoveredFile:
    """A regular file found under a source root."""

    absolute_path: Path
    relative_path: Path


@dataclass(frozen=True)
class FileResult:
    """Outcome of processing one destination path."""

    task: SyncTask
    source: Path | None
    destination: Path
    outcome: SyncOutcome

    def to_dict(self) -> dict[str, object]:
        return {
            "agent": self.task.agent_id,
            "kind": self.task.kind.value,
            "source": str(self.source) if self.source else None,
            "destination": str(self.destination),
            "outcome": self.outcome.name.lower(),
        }


@dataclass
class AgentPlan:
    """Sync tasks resolved for one selected agent."""

    agent: AgentSpec
    tasks: list[SyncTask] = field(default_factory=list)
    skip_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None
