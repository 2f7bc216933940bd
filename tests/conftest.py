"""Pytest configuration and fixtures for branch_puller tests."""

import io
import tempfile
from pathlib import Path

import pytest
from git import Repo
from rich.console import Console

from branch_puller.reporter import Reporter


def _configure_user(repo: Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def console_buffer():
    """Buffer receiving everything the reporter prints."""
    return io.StringIO()


@pytest.fixture
def reporter(console_buffer: io.StringIO):
    """Reporter writing plain text to console_buffer."""
    console = Console(file=console_buffer, width=200, color_system=None, highlight=False)
    return Reporter(console=console, err_console=console)


@pytest.fixture
def origin_repo(temp_dir: Path):
    """Create an upstream repository with a default branch and a 'release' branch."""
    repo_path = temp_dir / "origin"
    repo_path.mkdir()

    repo = Repo.init(repo_path)
    _configure_user(repo)

    readme = repo_path / "README.md"
    readme.write_text("# Origin Repo")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.create_head("release")

    yield repo_path


@pytest.fixture
def workspace(temp_dir: Path, origin_repo: Path):
    """
    Create a folder of repositories cloned from origin.

    repoA has a local 'release' branch tracking origin/release.
    repoB only has the default branch locally.
    notes.txt is a plain file.
    """
    root = temp_dir / "workspace"
    root.mkdir()

    repo_a = Repo.clone_from(str(origin_repo), str(root / "repoA"))
    _configure_user(repo_a)
    repo_a.git.branch("release", "origin/release")

    repo_b = Repo.clone_from(str(origin_repo), str(root / "repoB"))
    _configure_user(repo_b)

    (root / "notes.txt").write_text("not a repository\n")

    # New upstream work on release, so pulling repoA has something to fetch
    origin = Repo(origin_repo)
    origin.git.checkout("release")
    (origin_repo / "CHANGELOG.md").write_text("# Changes\n")
    origin.index.add(["CHANGELOG.md"])
    origin.index.commit("Add changelog")

    yield root
