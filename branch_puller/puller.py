"""
Main puller logic.

Snapshots the immediate children of the root folder, counts the directories,
then walks the snapshot and, for every directory that has the target branch,
checks the branch out and pulls it. Any fatal error stops the whole run.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rich.markup import escape
from rich.table import Table

from .config import PullConfig
from .errors import RootReadError
from .git_ops import CommandOutcome, branch_listed, run_git
from .reporter import Reporter

GitRunner = Callable[[list[str], Path, str], CommandOutcome]


@dataclass
class RepoEntry:
    """One immediate child of the root folder."""

    path: Path
    is_dir: bool


@dataclass
class PullSummary:
    """Result of a pull run."""

    entries_detected: int = 0
    directories_counted: int = 0
    directories_visited: int = 0
    branches_found: int = 0
    repos_skipped: int = 0
    failed_commands: int = 0  # git exited non-zero; reported, never raised


def list_entries(root: Path) -> list[RepoEntry]:
    """
    Read the entries of root once, in directory listing order.

    Symlinks are not followed, so a link to a directory is not a directory.

    Raises:
        RootReadError: If root or an entry's metadata cannot be read
    """
    root = Path(root)
    entries = []
    try:
        with os.scandir(root) as it:
            for dir_entry in it:
                path = Path(dir_entry.path)
                try:
                    is_dir = dir_entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    raise RootReadError(path, e.strerror or str(e)) from e
                entries.append(RepoEntry(path=path, is_dir=is_dir))
    except OSError as e:
        raise RootReadError(root, e.strerror or str(e)) from e
    return entries


def count_directories(entries: list[RepoEntry], reporter: Reporter) -> int:
    """Report every entry and return how many of them are directories."""
    count = 0
    reporter.counting_started()
    for entry in entries:
        reporter.detected(entry.path)
        if entry.is_dir:
            count += 1
            reporter.counted(count)
    return count


class BranchPuller:
    """Checks out and pulls one branch across the repositories under a folder."""

    def __init__(
        self,
        config: PullConfig,
        reporter: Reporter | None = None,
        runner: GitRunner = run_git,
    ):
        """Initialize the puller with configuration."""
        self.config = config
        self.reporter = reporter or Reporter()
        self.runner = runner

    def _git(self, args: list[str], repo_path: Path) -> CommandOutcome:
        return self.runner(args, repo_path, self.config.git_executable)

    def branch_exists(self, repo_path: Path) -> bool:
        """Check whether the configured branch is listed by `git branch`."""
        branch = self.config.branch_name
        self.reporter.checking_branches(repo_path)
        outcome = self._git(["branch"], repo_path)

        found = branch_listed(outcome.stdout_text(), branch)
        self.reporter.branch_result(branch, found)
        return found

    def checkout(self, repo_path: Path) -> CommandOutcome:
        """Run `git checkout <branch>` without interpreting the result."""
        self.reporter.checking_out(repo_path)
        return self._git(["checkout", self.config.branch_name], repo_path)

    def pull(self, repo_path: Path) -> CommandOutcome:
        """Run `git pull` without interpreting the result."""
        self.reporter.pulling(repo_path)
        return self._git(["pull"], repo_path)

    def run(self) -> PullSummary:
        """
        Process every directory under the root folder.

        Returns:
            PullSummary with counts for the run

        Raises:
            BranchPullerError: On the first read, spawn or decode failure
        """
        summary = PullSummary()

        entries = list_entries(self.config.root_path)
        summary.entries_detected = len(entries)
        total = count_directories(entries, self.reporter)
        summary.directories_counted = total

        for i, entry in enumerate(entries, start=1):
            if not entry.is_dir:
                continue

            summary.directories_visited += 1
            self.reporter.repo_header(i, total)

            if not self.branch_exists(entry.path):
                summary.repos_skipped += 1
                continue
            summary.branches_found += 1

            for step in (self.checkout, self.pull):
                outcome = step(entry.path)
                self.reporter.outcome(outcome)
                if not outcome.succeeded:
                    summary.failed_commands += 1

        self._print_summary(summary)
        return summary

    def _print_summary(self, summary: PullSummary) -> None:
        """Print a summary table of the run."""
        table = Table(title=f"Branch '{escape(self.config.branch_name)}'")
        table.add_column("Status", style="bold")
        table.add_column("Count", justify="right")

        table.add_row("Directories", str(summary.directories_visited))
        table.add_row("Branch found", f"[green]{summary.branches_found}[/green]")
        table.add_row("Skipped (no branch)", f"[yellow]{summary.repos_skipped}[/yellow]")
        table.add_row("Git commands failed", f"[red]{summary.failed_commands}[/red]")

        self.reporter.console.print()
        self.reporter.console.print(table)
