"""
Resolve selected agents into concrete sync tasks.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from automaton.core.errors import UnknownAgentError
from automaton.core.models import AgentPlan, AgentSpec, SyncTask, TaskKind
from automaton.sync.agents import AGENTS

NO_SKILLS_SUPPORT = "no skills support"


def resolve_plans(
    agent_ids: Iterable[str],
    *,
    target_root: Path,
    commands_source: Path,
    skills_source: Path,
    skills_only: bool = False,
    commands_only: bool = False,
    home: Path | None = None,
    agents: Mapping[str, AgentSpec] = AGENTS,
) -> list[AgentPlan]:
    """Build one AgentPlan per selected agent, in selection order.

    Every identifier is validated before any plan is built, so an unknown
    agent fails the run before anything touches the filesystem.
    """
    selected = list(dict.fromkeys(agent_ids))
    for agent_id in selected:
        if agent_id not in agents:
            raise UnknownAgentError(agent_id, agents)

    home = home if home is not None else Path.home()
    plans: list[AgentPlan] = []

    for agent_id in selected:
        spec = agents[agent_id]
        if skills_only and not spec.supports_skills:
            plans.append(AgentPlan(agent=spec, skip_reason=NO_SKILLS_SUPPORT))
            continue

        root = home if spec.is_global else target_root
        plan = AgentPlan(agent=spec)

        if not skills_only:
            plan.tasks.append(
                SyncTask(
                    agent_id=agent_id,
                    source_root=commands_source,
                    dest_root=root / spec.commands_path,
                    kind=TaskKind.COMMANDS,
                    flat_suffix=spec.flat_suffix,
                )
            )
        if spec.skills_path is not None and not commands_only:
            plan.tasks.append(
                SyncTask(
                    agent_id=agent_id,
                    source_root=skills_source,
                    dest_root=root / spec.skills_path,
                    kind=TaskKind.SKILLS,
                )
            )
        plans.append(plan)

    return plans


def flatten_tasks(plans: Iterable[AgentPlan]) -> list[SyncTask]:
    """All tasks of the given plans, in order."""
    return [task for plan in plans for task in plan.tasks]
