"""
Automaton sync module.

Resolves agent destinations and applies the link, mirror, or copy discipline.
"""

from automaton.sync.manager import SyncManager
from automaton.sync.resolver import resolve_plans
from automaton.sync.summary import RunSummary

__all__ = ["SyncManager", "RunSummary", "resolve_plans"]
