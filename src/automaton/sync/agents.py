"""
Destination conventions of the supported coding agents.
"""

from __future__ import annotations

from types import MappingProxyType

from automaton.core.models import AgentSpec

_AGENT_SPECS = (
    AgentSpec(
        agent_id="claude",
        display_name="Claude Code",
        commands_path=".claude/commands",
        skills_path=".claude/skills",
    ),
    AgentSpec(
        agent_id="opencode",
        display_name="OpenCode",
        commands_path=".opencode/command",
    ),
    AgentSpec(
        agent_id="codex",
        display_name="Codex CLI",
        commands_path=".codex/prompts",
        is_global=True,
    ),
    AgentSpec(
        agent_id="droid",
        display_name="Droid CLI",
        commands_path=".factory/commands",
        skills_path=".factory/skills",
    ),
    AgentSpec(
        agent_id="copilot",
        display_name="GitHub Copilot",
        commands_path=".github/prompts",
        flat_suffix=".prompt",
    ),
    AgentSpec(
        agent_id="cursor",
        display_name="Cursor",
        commands_path=".cursor/commands",
    ),
    AgentSpec(
        agent_id="cad",
        display_name="CAD (Claude Agent Desktop)",
        commands_path=".agents/commands",
        skills_path=".agent/skills",
    ),
)

AGENTS = MappingProxyType({spec.agent_id: spec for spec in _AGENT_SPECS})
ALL_AGENTS: tuple[str, ...] = tuple(AGENTS)


def describe_agent(spec: AgentSpec) -> str:
    """One-line description of where an agent's files land, for --help."""
    root = "~" if spec.is_global else "<target>"
    parts = [f"{root}/{spec.commands_path}/"]
    if spec.skills_path:
        parts.append(f"{root}/{spec.skills_path}/")
    text = " + ".join(parts)
    if spec.flat_suffix:
        text += f" (flat, *{spec.flat_suffix}.md)"
    if spec.is_global:
        text += " (global, ignores target path)"
    return text
