"""
Automaton - Sync curated AI agent commands and skills into projects.

Distributes the commands and skills kept in the automaton checkout into the
per-agent directories used by AI coding assistants.
"""

__version__ = "1.0.0"
__author__ = "Automaton Team"

from automaton.core.config import AutomatonConfig, SyncOptions
from automaton.sync.manager import SyncManager

__all__ = ["AutomatonConfig", "SyncOptions", "SyncManager", "__version__"]
