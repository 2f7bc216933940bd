"""
CLI entry point for branch_puller.

Autopull a branch in every immediate subdirectory of a folder.
"""

from pathlib import Path

import click
from pydantic import ValidationError

from .config import PullConfig
from .errors import BranchPullerError
from .puller import BranchPuller
from .reporter import Reporter


def _error_chain(error: BaseException) -> list[str]:
    """Collect the messages of an exception and its causes."""
    messages = []
    current: BaseException | None = error
    while current is not None:
        messages.append(str(current))
        current = current.__cause__
    return messages


@click.command()
@click.version_option(package_name="branch-puller")
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("branch_name")
def cli(path: Path, branch_name: str):
    """Autopull BRANCH_NAME in all subdirectories of PATH.

    PATH is the folder containing the git repositories. Repositories without
    a local BRANCH_NAME are skipped.
    """
    reporter = Reporter()

    try:
        config = PullConfig(root_path=path, branch_name=branch_name)
    except ValidationError as e:
        for err in e.errors():
            reporter.error(f"Invalid {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit(1)

    try:
        BranchPuller(config, reporter=reporter).run()
    except BranchPullerError as e:
        chain = _error_chain(e)
        reporter.error(chain[0])
        for cause in chain[1:]:
            reporter.error(f"  caused by: {cause}")
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
