"""
Automaton CLI Module.

Provides the command-line interface for syncing automaton content.
"""

from automaton.cli.main import main, cli

__all__ = ["main", "cli"]
