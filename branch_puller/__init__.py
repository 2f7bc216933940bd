"""
Branch Puller - Batch checkout-and-pull across sibling git repositories.

This package walks the immediate subdirectories of a folder and, in every
repository that has a local branch of the requested name, checks that branch
out and pulls it, streaming git's output to the console.
"""

import os

# A missing git must surface per command as GitSpawnError, not at `import git`
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

__version__ = "1.0.0"
