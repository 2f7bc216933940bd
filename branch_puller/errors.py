"""Fatal errors that abort a pull run."""

from pathlib import Path


class BranchPullerError(Exception):
    """Base class for errors that stop the whole run."""


class RootReadError(BranchPullerError):
    """The root folder or one of its entries could not be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read path: {str(path)!r} ({reason})")


class GitSpawnError(BranchPullerError):
    """The git executable could not be started."""

    def __init__(self, command: list[str], cwd: Path, reason: str):
        self.command = command
        self.cwd = cwd
        self.reason = reason
        super().__init__(
            f"Failed to execute process: {' '.join(command)!r}, in {str(cwd)!r} ({reason})"
        )


class OutputDecodeError(BranchPullerError):
    """Git produced output that is not valid UTF-8."""

    def __init__(self, command: list[str], cwd: Path, stream: str):
        self.command = command
        self.cwd = cwd
        self.stream = stream
        super().__init__(
            f"Output of {' '.join(command)!r} in {str(cwd)!r} is not valid UTF-8 ({stream})"
        )
