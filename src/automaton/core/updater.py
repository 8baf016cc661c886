"""
Best-effort refresh of the automaton checkout before a sync.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from automaton.core.logging import get_logger

logger = get_logger(__name__)


def update_source_repo(repo: Path, timeout: int = 60) -> bool:
    """Run ``git pull`` in the source checkout.

    Returns True when the pull succeeded. Any failure (offline, not a git
    repository, git missing, timeout) is logged and reported as False so the
    caller can continue with the local state.
    """
    command = ["git", "-C", str(repo), "pull", "--quiet"]
    logger.debug("Running command", command=command)

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.warning("Source refresh failed", repo=str(repo), error=str(exc))
        return False

    if result.returncode != 0:
        logger.warning(
            "Source refresh failed",
            repo=str(repo),
            returncode=result.returncode,
            stderr=result.stderr[:500] if result.stderr else "",
        )
        return False

    logger.info("Source refreshed", repo=str(repo))
    return True
