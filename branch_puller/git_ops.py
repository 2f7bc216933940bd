"""
Git operations for the puller.

A narrow wrapper around running the git executable through GitPython:
invoke a command in a working directory and hand back the exit status with
the raw stdout/stderr bytes, leaving interpretation to the caller.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from git import Git
from git.compat import defenc
from git.exc import GitCommandNotFound

from .errors import GitSpawnError, OutputDecodeError


@dataclass
class CommandOutcome:
    """Result of a single git invocation."""

    command: list[str]
    cwd: Path
    status: int
    stdout: bytes
    stderr: bytes

    @property
    def succeeded(self) -> bool:
        """Whether git exited with status 0."""
        return self.status == 0

    def stdout_text(self) -> str:
        """Strictly decode stdout."""
        return decode_output(self.stdout, self, "stdout")

    def stderr_text(self) -> str:
        """Strictly decode stderr."""
        return decode_output(self.stderr, self, "stderr")


def decode_output(data: bytes, outcome: CommandOutcome, stream: str) -> str:
    """Decode command output as UTF-8, raising OutputDecodeError on bad bytes."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise OutputDecodeError(outcome.command, outcome.cwd, stream) from e


def run_git(args: list[str], cwd: Path, git_executable: str = "git") -> CommandOutcome:
    """
    Run git with the given arguments and wait for it to exit.

    There is no timeout. A non-zero exit status is returned, not raised.

    Args:
        args: Arguments after the executable (e.g. ["checkout", "main"])
        cwd: Working directory for the process
        git_executable: Name or path of the git binary

    Returns:
        CommandOutcome with the exit status and raw output bytes

    Raises:
        GitSpawnError: If the process could not be started
    """
    command = [git_executable, *args]
    cwd = Path(cwd)

    # GitPython silently falls back to the current directory for a cwd it cannot enter
    if not cwd.is_dir():
        raise GitSpawnError(command, cwd, "working directory does not exist")
    if not os.access(cwd, os.X_OK):
        raise GitSpawnError(command, cwd, "working directory is not accessible")

    try:
        status, stdout, stderr = Git(str(cwd)).execute(
            command,
            with_extended_output=True,
            with_exceptions=False,
            stdout_as_string=False,
            strip_newline_in_stdout=False,
        )
    except GitCommandNotFound as e:
        reason = str(e.__cause__) if e.__cause__ else str(e)
        raise GitSpawnError(command, cwd, reason) from e
    except OSError as e:
        raise GitSpawnError(command, cwd, e.strerror or str(e)) from e

    # GitPython returns stderr already decoded with surrogateescape; restore the bytes
    if isinstance(stderr, str):
        stderr = stderr.encode(defenc, "surrogateescape")

    return CommandOutcome(
        command=command,
        cwd=cwd,
        status=status,
        stdout=stdout,
        stderr=stderr,
    )


def branch_listed(listing: str, branch: str) -> bool:
    """
    Check whether `git branch` output lists the given branch.

    This is a plain substring test for the branch name followed by a newline.
    The "* " marker on the current branch is not stripped, which still
    matches since the marker sits before the name. A branch whose name ends
    with the requested one also matches ("bar" matches "foo-bar").
    """
    return f"{branch}\n" in listing
