"""
Automaton Core - Configuration, models, and logging.

Contains the data model, configuration, error types, and logging shared by
the sync engine and the CLI.
"""

from automaton.core.config import AutomatonConfig, LoggingConfig, SyncOptions
from automaton.core.errors import (
    AutomatonError,
    SourceOverlapError,
    TargetNotFoundError,
    UnknownAgentError,
)
from automaton.core.logging import get_logger, setup_logging
from automaton.core.models import SyncMode, SyncOutcome, SyncTask, TaskKind

__all__ = [
    "AutomatonConfig",
    "LoggingConfig",
    "SyncOptions",
    "AutomatonError",
    "SourceOverlapError",
    "TargetNotFoundError",
    "UnknownAgentError",
    "get_logger",
    "setup_logging",
    "SyncMode",
    "SyncOutcome",
    "SyncTask",
    "TaskKind",
]
