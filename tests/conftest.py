"""
Pytest configuration and fixtures for automaton tests.
"""

import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a scratch directory so config, logs and global agents stay local."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def source_repo(temp_dir: Path) -> Path:
    """Create an automaton checkout with a couple of commands and one skill."""
    repo = temp_dir / "automaton"
    commands = repo / ".agents" / "commands"
    skills = repo / ".agents" / "skills"
    (commands / "sub").mkdir(parents=True)
    (skills / "review").mkdir(parents=True)
    (commands / "x.md").write_text("# x\n")
    (commands / "sub" / "y.md").write_text("# y\n")
    (skills / "review" / "SKILL.md").write_text("# review skill\n")
    return repo


@pytest.fixture
def project(temp_dir: Path) -> Path:
    """Create an empty target project directory."""
    path = temp_dir / "project"
    path.mkdir()
    return path


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
