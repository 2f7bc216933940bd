"""
Console output for branch_puller.

Every progress line starts with a fixed-width bracketed tag. The tags look
like rich markup, so lines are assembled as Text objects instead of markup
strings.
"""

from pathlib import Path

from rich.console import Console
from rich.text import Text

from .git_ops import CommandOutcome

SPACER = "               "
COUNTING = "[counting]     "
CHECK_BRANCH = "[git branch]   "
ERROR = " ! [error]     "
GIT_CHECKOUT = "[git checkout] "
GIT_PULL = "[git pull]     "
OUTPUT = " > [output]      | "


def output_lines(text: str) -> list[str]:
    """Split on line feeds only, dropping a carriage return before each and the empty tail."""
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class Reporter:
    """Prints tagged progress lines to a rich console."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def _line(self, tag: str, message: str, style: str = "cyan") -> None:
        self.console.print(Text.assemble((tag, style), " ", message), soft_wrap=True)

    # ---------- counting pass ----------
    def counting_started(self) -> None:
        self._line(COUNTING, "Counting paths")

    def detected(self, path: Path) -> None:
        self._line(SPACER, f' |  Detected path: "{path}"')

    def counted(self, count: int) -> None:
        self._line(SPACER, f" |  Added - current count: {count}")

    # ---------- per-repo loop ----------
    def repo_header(self, index: int, total: int) -> None:
        self.console.print()
        self.console.print()
        self.console.print(
            Text.assemble((f"[{index} / {total}]", "bold"), "         Continuing with next repo:"),
            soft_wrap=True,
        )

    def checking_branches(self, path: Path) -> None:
        self._line(CHECK_BRANCH, f'Checking branches of "{path}"')

    def branch_result(self, branch: str, found: bool) -> None:
        if found:
            self._line(CHECK_BRANCH, f"Branch '{branch}' found", style="green")
        else:
            self._line(CHECK_BRANCH, f"Branch '{branch}' not found", style="yellow")

    def checking_out(self, path: Path) -> None:
        self._line(GIT_CHECKOUT, f'Checking out: "{path}"')

    def pulling(self, path: Path) -> None:
        self._line(GIT_PULL, f'Pulling: "{path}"')

    def outcome(self, outcome: CommandOutcome) -> None:
        """Print the exit status, then each stdout line, then each stderr line."""
        # Decode both streams before printing anything so a bad stream aborts cleanly
        out = outcome.stdout_text()
        err = outcome.stderr_text()

        status_style = "dim" if outcome.succeeded else "red"
        self._line(OUTPUT, f"exit status: {outcome.status}", style=status_style)
        for line in output_lines(out):
            self._line(OUTPUT, line, style="dim")
        for line in output_lines(err):
            self._line(OUTPUT, line, style="dim")

    # ---------- errors ----------
    def error(self, message: str) -> None:
        self.err_console.print(Text.assemble((ERROR, "bold red"), " ", message), soft_wrap=True)
