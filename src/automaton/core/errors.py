"""
Automaton exceptions.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class AutomatonError(Exception):
    """Base class for automaton errors."""


class UnknownAgentError(AutomatonError):
    """Raised when an agent identifier is not in the agent table."""

    def __init__(self, agent_id: str, known: Iterable[str]) -> None:
        self.agent_id = agent_id
        self.known = list(known)
        super().__init__(
            f"Unknown agent '{agent_id}' (expected one of: {', '.join(self.known)})"
        )


class TargetNotFoundError(AutomatonError):
    """Raised when the target project directory does not exist."""

    def __init__(self, target: Path) -> None:
        self.target = target
        super().__init__(f"target directory does not exist: {target}")


class SourceOverlapError(AutomatonError):
    """Raised when a destination would be written inside the source tree."""

    def __init__(self, destination: Path, source_root: Path) -> None:
        self.destination = destination
        self.source_root = source_root
        super().__init__(
            f"refusing to write {destination}: it is inside the source tree {source_root}"
        )
