"""
End-to-end tests for the automaton-sync command line.

Runs the click command against real temporary trees with HOME isolated.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from automaton.cli.main import cli, main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, isolated_home: Path, source_repo: Path):
    """Invoke the CLI against source_repo without touching git."""

    def _invoke(*args: str):
        return runner.invoke(cli, ["--no-pull", "--source", str(source_repo), *args])

    return _invoke


class TestEndToEnd:
    """Scenario tests for a full run."""

    @pytest.mark.parametrize("mode", ["link", "copy", "mirror"])
    def test_empty_destination_creates_everything(self, invoke, project: Path, mode: str) -> None:
        result = invoke("--claude", "--commands-only", "--mode", mode, "--json", str(project))

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["created"] == 2
        assert data["exit_code"] == 0
        assert (project / ".claude" / "commands" / "x.md").read_text() == "# x\n"
        assert (project / ".claude" / "commands" / "sub" / "y.md").read_text() == "# y\n"

    def test_local_modification_is_skipped(self, invoke, project: Path) -> None:
        commands = project / ".claude" / "commands"
        commands.mkdir(parents=True)
        (commands / "x.md").write_text("my edit\n")

        result = invoke("--claude", "--mode", "copy", str(project))

        assert result.exit_code == 1
        assert f"{commands / 'x.md'} (local modifications, skipped)" in result.output
        assert f"{commands / 'sub' / 'y.md'} (copied)" in result.output
        assert "1 file(s) were skipped due to local modifications." in result.output
        assert "Run with --force to overwrite them." in result.output
        assert (commands / "x.md").read_text() == "my edit\n"
        assert (project / ".claude" / "skills" / "review" / "SKILL.md").exists()

    def test_force_overwrites(self, invoke, project: Path) -> None:
        commands = project / ".claude" / "commands"
        commands.mkdir(parents=True)
        (commands / "x.md").write_text("my edit\n")

        result = invoke("--claude", "--mode", "copy", "--force", str(project))

        assert result.exit_code == 0, result.output
        assert f"{commands / 'x.md'} (overwritten)" in result.output
        assert "Done!" in result.output
        assert (commands / "x.md").read_text() == "# x\n"

    def test_second_copy_run_is_up_to_date(self, invoke, project: Path) -> None:
        invoke("--all", "--mode", "copy", str(project))

        result = invoke("--all", "--mode", "copy", "--json", str(project))

        data = json.loads(result.stdout)
        assert result.exit_code == 0
        assert data["summary"]["created"] == 0
        assert data["summary"]["overwritten"] == 0
        assert data["summary"]["up_to_date"] == len(data["files"])

    def test_default_mode_links(self, invoke, project: Path) -> None:
        result = invoke("--droid", str(project))

        assert result.exit_code == 0, result.output
        assert "(linked)" in result.output
        assert (project / ".factory" / "commands" / "x.md").is_symlink()
        assert (project / ".factory" / "skills" / "review" / "SKILL.md").is_symlink()


class TestAgents:
    """Agent-specific destinations."""

    def test_codex_is_global(self, invoke, project: Path, isolated_home: Path) -> None:
        result = invoke("--codex", "--mode", "copy", str(project))

        assert result.exit_code == 0, result.output
        assert "Codex CLI (global):" in result.output
        assert (isolated_home / ".codex" / "prompts" / "x.md").exists()
        assert not (project / ".codex").exists()

    def test_copilot_flat_names(self, invoke, project: Path) -> None:
        result = invoke("--copilot", "--mode", "copy", str(project))

        assert result.exit_code == 0, result.output
        prompts = project / ".github" / "prompts"
        assert sorted(p.name for p in prompts.iterdir()) == ["x.prompt.md"]

    def test_cad_paths(self, invoke, project: Path) -> None:
        result = invoke("--cad", "--mode", "copy", str(project))

        assert result.exit_code == 0, result.output
        assert (project / ".agents" / "commands" / "x.md").exists()
        assert (project / ".agent" / "skills" / "review" / "SKILL.md").exists()


class TestScopeFlags:
    """--skills-only and --commands-only narrowing."""

    def test_skills_only(self, invoke, project: Path) -> None:
        result = invoke("--claude", "--opencode", "--skills-only", "--mode", "copy", str(project))

        assert result.exit_code == 0, result.output
        assert "OpenCode: skipped (no skills support)" in result.output
        assert not (project / ".claude" / "commands").exists()
        assert not (project / ".opencode").exists()
        assert (project / ".claude" / "skills" / "review" / "SKILL.md").exists()

    def test_commands_only(self, invoke, project: Path) -> None:
        result = invoke("--claude", "--commands-only", "--mode", "copy", str(project))

        assert result.exit_code == 0, result.output
        assert (project / ".claude" / "commands" / "x.md").exists()
        assert not (project / ".claude" / "skills").exists()

    def test_both_flags_sync_nothing(self, invoke, project: Path) -> None:
        result = invoke("--all", "--skills-only", "--commands-only", str(project))

        assert result.exit_code == 0, result.output
        assert "Done!" in result.output
        assert list(project.iterdir()) == []


class TestOptions:
    """Option handling and validation."""

    def test_missing_target_directory(self, invoke, temp_dir: Path) -> None:
        result = invoke("--claude", str(temp_dir / "missing"))

        assert result.exit_code == 1
        assert "target directory does not exist" in result.output

    def test_force_ignored_outside_copy_mode(self, invoke, project: Path) -> None:
        result = invoke("--claude", "--force", str(project))

        assert result.exit_code == 0, result.output
        assert "--force only applies to --mode copy" in result.stderr
        assert "--force" not in result.stdout

    def test_json_stdout_has_only_the_summary(self, invoke, project: Path) -> None:
        result = invoke("--claude", "--json", "--force", "--mode", "link", str(project))

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["exit_code"] == 0
        assert "--force only applies to --mode copy" in result.stderr

    def test_json_error_goes_to_stderr(self, invoke, temp_dir: Path) -> None:
        result = invoke("--claude", "--json", str(temp_dir / "missing"))

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "target directory does not exist" in result.stderr

    def test_cad_on_the_checkout_keeps_source(self, invoke, source_repo: Path) -> None:
        result = invoke("--cad", "--commands-only", str(source_repo))

        assert result.exit_code == 0, result.output
        source = source_repo / ".agents" / "commands"
        assert not (source / "x.md").is_symlink()
        assert (source / "x.md").read_text() == "# x\n"
        assert (source / "sub" / "y.md").read_text() == "# y\n"

    def test_overlap_error_exits_one(self, invoke, source_repo: Path, project: Path) -> None:
        (project / ".claude").mkdir()
        (project / ".claude" / "commands").symlink_to(source_repo / ".agents" / "commands")

        result = invoke("--claude", "--commands-only", "--mode", "mirror", "--json", str(project))

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "inside the source tree" in result.stderr
        assert (source_repo / ".agents" / "commands" / "x.md").read_text() == "# x\n"

    def test_pull_failure_is_a_warning(
        self, runner: CliRunner, isolated_home: Path, source_repo: Path, project: Path
    ) -> None:
        with patch("automaton.cli.main.update_source_repo", return_value=False) as update:
            result = runner.invoke(cli, ["--source", str(source_repo), "--claude", str(project)])

        update.assert_called_once_with(source_repo.resolve())
        assert result.exit_code == 0, result.output
        assert "Could not update automaton" in result.output
        assert (project / ".claude" / "commands" / "x.md").exists()

    def test_no_pull_skips_update(self, invoke, project: Path) -> None:
        with patch("automaton.cli.main.update_source_repo") as update:
            result = invoke("--claude", str(project))

        assert result.exit_code == 0, result.output
        update.assert_not_called()


class TestMainExitCodes:
    """Exit codes produced by the console entry point."""

    def _exit_code(self, argv: list[str]) -> int:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        return exc_info.value.code

    def test_missing_target_argument(self, isolated_home: Path, capsys: pytest.CaptureFixture) -> None:
        assert self._exit_code(["--claude"]) == 1
        assert "target project path is required" in capsys.readouterr().err

    def test_no_agent_selected(self, isolated_home: Path, project: Path, capsys: pytest.CaptureFixture) -> None:
        assert self._exit_code([str(project)]) == 1
        assert "at least one agent flag is required" in capsys.readouterr().err

    def test_invalid_mode(self, isolated_home: Path, project: Path) -> None:
        assert self._exit_code(["--claude", "--mode", "rsync", str(project)]) == 1

    def test_unknown_option(self, isolated_home: Path, project: Path) -> None:
        assert self._exit_code(["--emacs", str(project)]) == 1

    def test_help(self, isolated_home: Path, capsys: pytest.CaptureFixture) -> None:
        assert self._exit_code(["--help"]) == 0
        assert "--copilot" in capsys.readouterr().out

    def test_conflict_exit_code(self, isolated_home: Path, source_repo: Path, project: Path) -> None:
        commands = project / ".claude" / "commands"
        commands.mkdir(parents=True)
        (commands / "x.md").write_text("edited")
        argv = ["--no-pull", "--source", str(source_repo), "--claude", "--mode", "copy", str(project)]

        assert self._exit_code(argv) == 1

    def test_success_exit_code(self, isolated_home: Path, source_repo: Path, project: Path) -> None:
        argv = ["--no-pull", "--source", str(source_repo), "--claude", str(project)]
        assert self._exit_code(argv) == 0
